from pathlib import Path

from workbench.errors import FileOperationError
from workbench.models import ActionResult

SPEC_FILE = Path("spec") / "mod.spec.yaml"
PROMPT_FILE = Path("generated") / "prompt.txt"
README_FILE = Path("generated") / "README.generated.md"

README_TEMPLATE = """\
# Generated Mod Workspace

## Prompt
{prompt}

## Next
- Run build
- Run runClient
- Iterate with prompt/spec
"""


def generate_scaffold(project_path, prompt, spec):
    """Write the mod spec, the prompt and a README into a (possibly new) project."""
    project = Path(project_path)
    files = {
        SPEC_FILE: spec,
        PROMPT_FILE: prompt,
        README_FILE: README_TEMPLATE.format(prompt=prompt),
    }
    try:
        for rel, content in files.items():
            dest = project / rel
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileOperationError(f"Failed to generate scaffold in {project}: {e}") from e

    return ActionResult(success=True, output=f"Generated scaffold in {project}")
