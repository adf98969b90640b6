"""Single entry point for workbench actions.

dispatch() resolves the project path, routes the action name to its handler
and returns an ActionResult. Failures surface as WorkbenchError subclasses.
run_workbench_action() wraps dispatch() for JSON callers: it never raises for
action failures and reports them as {"ok": false, "error", "kind"}.

Nothing is cached between calls; every action re-reads config and the
filesystem.
"""

from workbench.agents import get_agent
from workbench.build import BUILD_TASK, RUN_CLIENT_TASK, run_build
from workbench.config import load_config
from workbench.errors import FileOperationError, UnsupportedActionError, WorkbenchError
from workbench.lock import project_lock
from workbench.log import write_log
from workbench.models import ActionPayload
from workbench.paths import resolve_project_path
from workbench.prompts import (
    build_execute_instruction,
    build_plan_instruction,
    build_refine_instruction,
)
from workbench.runner import DEFAULT_OUTPUT_LIMIT, to_result
from workbench.scaffold import generate_scaffold
from workbench.snapshot import create_snapshot_store


def _learning_mode(payload, config):
    if payload.learning_mode is None:
        return bool(config.get("learning_mode", True))
    return bool(payload.learning_mode)


def _run_agent(project, payload, config, instruction):
    agent = get_agent(payload.provider or config.get("provider", "claude"))
    exit_code, stdout, stderr = agent.run(
        instruction,
        project,
        timeout=config.get("timeout"),
        output_limit=config.get("output_limit", DEFAULT_OUTPUT_LIMIT),
    )
    return to_result(exit_code, stdout, stderr)


def _generate(project, payload, config):
    return generate_scaffold(project, payload.prompt, payload.spec)


def _ai_plan(project, payload, config):
    instruction = build_plan_instruction(payload.prompt, _learning_mode(payload, config))
    return _run_agent(project, payload, config, instruction)


def _ai_refine(project, payload, config):
    instruction = build_refine_instruction(
        payload.prompt, payload.spec, payload.plan_draft, _learning_mode(payload, config)
    )
    return _run_agent(project, payload, config, instruction)


def _ai_execute(project, payload, config):
    instruction = build_execute_instruction(
        payload.prompt, payload.spec, payload.approved_plan, _learning_mode(payload, config)
    )
    # the agent edits files, so it must not interleave with snapshot/rollback
    with project_lock(project):
        return _run_agent(project, payload, config, instruction)


def _build(project, payload, config):
    return run_build(project, BUILD_TASK, config)


def _run_client(project, payload, config):
    return run_build(project, RUN_CLIENT_TASK, config)


def _snapshot(project, payload, config):
    store = create_snapshot_store(config)
    with project_lock(project):
        return store.create(project, payload.snapshot_name)


def _rollback(project, payload, config):
    store = create_snapshot_store(config)
    with project_lock(project):
        return store.restore(project, payload.snapshot_name)


HANDLERS = {
    "generate": _generate,
    "ai_plan": _ai_plan,
    "ai_refine": _ai_refine,
    "ai_execute": _ai_execute,
    "build": _build,
    "run_client": _run_client,
    "snapshot": _snapshot,
    "rollback": _rollback,
}


def _audit(entry):
    """Write entry to the audit log. Returns a warning line instead of raising."""
    try:
        write_log(entry)
    except FileOperationError as e:
        return f"Warning: {e}"
    return ""


def dispatch(action, payload, config=None):
    """Run one action. payload is an ActionPayload or a camelCase mapping."""
    if not isinstance(payload, ActionPayload):
        payload = ActionPayload.from_dict(payload)

    project = resolve_project_path(payload.project_path)

    handler = HANDLERS.get(action)
    if handler is None:
        raise UnsupportedActionError(f"Unsupported action: {action}")

    if config is None:
        config = load_config(project)

    entry = {"event": action, "project": str(project)}
    if payload.snapshot_name:
        entry["snapshot"] = payload.snapshot_name

    try:
        result = handler(project, payload, config)
    except WorkbenchError as e:
        _audit({**entry, "result": "error", "error": str(e)})
        raise

    warning = _audit({**entry, "result": "ok" if result.success else "failed"})
    if warning:
        result.output = f"{result.output}\n{warning}" if result.output else warning
    return result


def run_workbench_action(action, payload):
    """JSON-facing wrapper around dispatch()."""
    try:
        result = dispatch(action, payload)
    except (WorkbenchError, ValueError) as e:
        return {"ok": False, "error": str(e), "kind": type(e).__name__}
    return {"ok": True, "result": result.to_dict()}
