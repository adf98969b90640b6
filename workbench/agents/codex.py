from workbench.agents.base import Agent


class CodexAgent(Agent):

    def command(self, instruction):
        # exec runs non-interactively and exits when the turn is done
        return ["codex", "exec", instruction]
