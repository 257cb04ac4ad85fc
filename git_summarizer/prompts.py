"""
Prompt texts exposed to the calling agent through the tool catalog.
"""

DEFAULT_COMMIT_FORMAT = """<type>[optional scope]: <english description>

[English body]

[Chinese body]

Log: [short description of the change use chinese language]
PMS: <BUG-number>(for bugfix) or <TASK-number>(for add feature) (Must include 'BUG-' or 'TASK-', If the user does not provide a number, remove this line.)
Influence: Explain in Chinese the potential impact of this submission."""

STAGED_DIFF_DESCRIPTION = (
    "获取当前 git 暂存区的变更内容 (git diff --staged)。"
    "获取后，请你根据变更内容总结出一个提交信息，并询问用户是否提交。\n\n"
    "### 提交格式要求：\n{commit_format}\n\n"
    "### 额外约束：\n"
    "- Body 的每一行不得超过 80 个字符。\n"
    "- 如果修改范围很小，可以同时省略 English body 和 Chinese body。\n"
    "- 如果不省略 body，则必须同时保留 English body 和 Chinese body，不得只写其中一个。"
)

EXECUTE_COMMIT_DESCRIPTION = "执行提交。请在用户确认了你总结的提交信息后再调用此工具。"

COMMIT_MESSAGE_DESCRIPTION = "提交信息"

UNKNOWN_TOOL_MESSAGE = "未知工具"

NO_STAGED_CHANGES_MESSAGE = "没有发现已暂存的变更。"


def render_staged_diff_description(commit_format: str) -> str:
    """Embed the commit format template into the get_staged_diff description."""
    return STAGED_DIFF_DESCRIPTION.format(commit_format=commit_format)
