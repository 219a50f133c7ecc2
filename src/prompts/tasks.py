"""Prompts for task and task-relationship generation.

Templates use {placeholders} filled in at runtime by the tools in
src/tools/. Literal JSON braces are doubled ({{ }}) so str.format leaves
them alone.


## How generation works (the big picture)

### Step 1: GENERATE TASKS
The model turns a free-text intent ("Build a login page") plus optional
project context into 3 to 12 task drafts. Drafts have a title, an optional
description and an optional priority, never an id.

### Step 2: PROPOSE RELATIONSHIPS (preview only)
Given the ordered drafts, the model proposes links between them using
placeholders task_1..task_N. Nothing is persisted yet; the user sees the
proposal and confirms it.

### Step 3: CONFIRM (no LLM)
Tasks are persisted, placeholders resolve to real ids, and each link is
created independently.
"""


# =============================================================================
# STEP 1: TASK GENERATION
# =============================================================================

LOCALE_DIRECTIVES = {
    "fr": "Répondez strictement en français.",
    "en": "Respond strictly in English.",
}

TASKS_SYSTEM = """\
You are a precise task generator. Output ONLY valid JSON matching the provided schema. No IDs.
Rules:
- No additional fields.
- Titles ≤ 80 chars. Descriptions ≤ 240 chars.
- No IDs. No markdown. JSON only.
- Generate 3-12 actionable tasks.
- If a desired task count is provided, generate exactly that many within 3–12.
- If no desired task count is provided, generate exactly {desired_task_count} tasks.
- Language policy: {locale_directive}\
"""

TASKS_USER = """\
Generate 3–12 actionable tasks from this intent:

{context_block}Intent: {prompt}
{constraints_line}
DesiredTaskCount: {desired_task_count}
Language: {locale}

Schema:
{{
  "tasks": [
    {{
      "title": string,
      "description"?: string,
      "priority"?: "LOW" | "MEDIUM" | "HIGH"
    }}
  ]
}}\
"""

# Context block (only when a project was found):
#   Project: Mobile app v2
#   Goal: Ship offline mode before Q3
#   Recent tasks: Set up CI, Design sync protocol, Write API spec
#
# Example output:
#   {"tasks": [
#     {"title": "Design login form", "description": "Email + password fields with validation", "priority": "HIGH"},
#     {"title": "Implement session handling", "priority": "HIGH"},
#     {"title": "Add password reset flow", "priority": "MEDIUM"}
#   ]}

FALLBACK_TASKS = [
    {
        "title": "Analyze requirements",
        "description": "Break down the requirement into detailed specifications",
        "priority": "HIGH",
    },
    {
        "title": "Create implementation plan",
        "description": "Design the technical approach and timeline",
        "priority": "HIGH",
    },
    {
        "title": "Execute implementation",
        "description": "Implement the solution according to the plan",
        "priority": "MEDIUM",
    },
]


# =============================================================================
# STEP 2: RELATIONSHIP PROPOSAL
# =============================================================================

RELATIONSHIPS_SYSTEM = """\
You are a precise task relationship generator.
Output policy:
- Output ONLY a JSON array, no prose or markdown.
- Use placeholder task references: task_1, task_2, … matching the given ordered list.
- Allowed types: {allowed_types}
- Prefer BLOCKS for prerequisite/sequence dependencies; use RELATES_TO for weak semantic associations.
- Prefer short, local dependency hops (task_1 → task_2) over links that skip steps.
- Avoid circular dependencies; do not link a task to itself; do not repeat a relationship.
- Propose at most {max_relationships} relationships when logically justified; otherwise return [].
- Respond in {locale}.\
"""

RELATIONSHIPS_USER = """\
Given these tasks, propose up to {max_relationships} relationships as a JSON array of objects with fields: sourceTask, targetTask, type.
Use only placeholder IDs task_N. Prefer simple prerequisite chains (BLOCKS) that reflect a natural order of execution.
If two tasks are clearly related but not strictly ordered, you may use RELATES_TO.
Tasks in order:
{task_list}

Example
Input tasks:
task_1: Design database schema — Define tables for users, roles
task_2: Implement user registration — Persist new users
task_3: Implement user login — Authenticate users
Expected relationships (JSON array only):
[
  {{ "sourceTask": "task_1", "targetTask": "task_2", "type": "BLOCKS" }},
  {{ "sourceTask": "task_2", "targetTask": "task_3", "type": "BLOCKS" }}
]

Follow the example format strictly; output only the JSON array for the current tasks.\
"""
