from abc import ABC, abstractmethod

from workbench.runner import DEFAULT_OUTPUT_LIMIT, run_process


class Agent(ABC):
    """Base interface for AI CLI adapters.

    Agents run on the host with the project directory as working directory.
    """

    @abstractmethod
    def command(self, instruction):
        """Return the argv that sends instruction to the CLI."""
        pass

    def run(self, instruction, cwd, timeout=None, output_limit=DEFAULT_OUTPUT_LIMIT):
        """Run one instruction. Returns (exit_code, stdout, stderr)."""
        return run_process(self.command(instruction), cwd, timeout=timeout, output_limit=output_limit)
