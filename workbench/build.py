import platform
import shlex

from workbench.runner import DEFAULT_OUTPUT_LIMIT, run_process, to_result

BUILD_TASK = "build"
RUN_CLIENT_TASK = "runClient"


def build_command(config=None):
    """The build tool argv prefix: config "build_command", else the Gradle wrapper."""
    config = config or {}
    custom = config.get("build_command")
    if custom:
        return shlex.split(custom)
    if platform.system() == "Windows":
        return ["gradlew.bat"]
    return ["./gradlew"]


def run_build(project_path, task, config=None):
    """Run one build task in the project. Returns an ActionResult."""
    config = config or {}
    exit_code, stdout, stderr = run_process(
        build_command(config) + [task],
        project_path,
        timeout=config.get("timeout"),
        output_limit=config.get("output_limit", DEFAULT_OUTPUT_LIMIT),
    )
    return to_result(exit_code, stdout, stderr)
