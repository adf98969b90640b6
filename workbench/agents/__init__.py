from workbench.agents.claude_code import ClaudeCodeAgent
from workbench.agents.codex import CodexAgent
from workbench.errors import UnknownProviderError

AGENTS = {
    "claude": ClaudeCodeAgent,
    "codex": CodexAgent,
}


def get_agent(name):
    if name not in AGENTS:
        raise UnknownProviderError(f"Unknown provider: {name}. Available: {list(AGENTS.keys())}")
    return AGENTS[name]()
