from workbench.agents.base import Agent


class ClaudeCodeAgent(Agent):

    def command(self, instruction):
        # print mode: answer once and exit instead of opening the interactive UI
        return ["claude", "-p", instruction]
