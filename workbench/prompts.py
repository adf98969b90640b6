"""Instruction text sent to the AI CLI for the plan, refine and execute steps.

Learning mode asks for explanations a young child can follow; otherwise the
answer is aimed at developers. Both are written in Japanese.
"""

PLAN_STYLE = {
    True: "Write in very easy Japanese for 小学2年生. Short sentences.",
    False: "Write in standard concise Japanese for developers.",
}

REFINE_STYLE = {
    True: "Write in very easy Japanese for 小学2年生.",
    False: "Write in standard concise Japanese for developers.",
}

EXECUTE_STYLE = {
    True: "After implementation, explain in easy Japanese for 小学2年生.",
    False: "After implementation, explain clearly for developers in Japanese.",
}

PLAN_TEMPLATE = """\
Create a plan only (no code changes).

Idea:
{prompt}

{style}
Return with headings:
1) なにをつくる？
2) どうなったらせいこう？
3) こまったらどうする？
4) さいしょのいっぽ"""

REFINE_TEMPLATE = """\
Refine this mod plan for execution (no code changes).

Idea:
{prompt}

Draft plan:
{plan_draft}

Spec:
{spec}

{style}
Return checklist with boxes style:
- [ ] ...
Also add one line:『ここを見ればOK』"""

EXECUTE_TEMPLATE = """\
You are editing a Minecraft mod project. Apply approved plan directly in code.

Idea:
{prompt}

Approved Plan:
{approved_plan}

Spec:
{spec}

{style}
Include:
1) どのファイルをかえたか
2) なにができるようになったか
3) つぎにためすこと"""


def build_plan_instruction(prompt, learning_mode=True):
    return PLAN_TEMPLATE.format(prompt=prompt, style=PLAN_STYLE[bool(learning_mode)])


def build_refine_instruction(prompt, spec, plan_draft, learning_mode=True):
    return REFINE_TEMPLATE.format(
        prompt=prompt,
        plan_draft=plan_draft,
        spec=spec,
        style=REFINE_STYLE[bool(learning_mode)],
    )


def build_execute_instruction(prompt, spec, approved_plan, learning_mode=True):
    return EXECUTE_TEMPLATE.format(
        prompt=prompt,
        approved_plan=approved_plan,
        spec=spec,
        style=EXECUTE_STYLE[bool(learning_mode)],
    )
