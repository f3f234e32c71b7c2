"""
Stack output helpers.

Writes resolved stack outputs to a dotenv file so local tooling and the
deploy scripts can read them without calling the Pulumi CLI.
"""

from pathlib import Path
from typing import Any, Mapping

import pulumi


def format_env_lines(values: Mapping[str, Any]) -> str:
    """
    Render outputs as KEY=value lines, keys upper-cased and sorted.

    None values are skipped.
    """
    lines = [
        f"{key.upper()}={value}"
        for key, value in sorted(values.items())
        if value is not None
    ]
    return "\n".join(lines) + "\n"


def write_outputs_to_env(
    outputs: Mapping[str, Any],
    filename: str = "infrastructure.env",
) -> pulumi.Output:
    """
    Write outputs to a dotenv file once they resolve.

    Skipped during preview, where most values are still unknown.

    Args:
        outputs: Export name to plain value or pulumi.Output
        filename: Target file, relative to the Pulumi project directory

    Returns:
        pulumi.Output: Resolves to the written path (or None in preview)
    """
    keys = list(outputs)

    def _write(values: list[Any]) -> str | None:
        if pulumi.runtime.is_dry_run():
            return None
        path = Path(filename)
        path.write_text(format_env_lines(dict(zip(keys, values))))
        pulumi.log.info(f"Wrote {len(keys)} outputs to {path}")
        return str(path)

    return pulumi.Output.all(*outputs.values()).apply(_write)
