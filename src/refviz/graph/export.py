"""Conversion of DOT text into images with the Graphviz ``dot`` executable."""

import logging
import shutil
import subprocess

from ..errors import RenderError

logger = logging.getLogger(__name__)


def render_dot(dot_text: str, output_format: str, executable: str = "dot") -> bytes:
    """Pipe ``dot_text`` through Graphviz and return the rendered bytes.

    Args:
        dot_text: Diagram produced by the renderer
        output_format: Any Graphviz output format, e.g. ``svg`` or ``png``
        executable: Name or path of the ``dot`` binary

    Raises:
        RenderError: If the executable is missing or exits with an error
    """
    binary = shutil.which(executable)
    if binary is None:
        raise RenderError(f"Graphviz executable '{executable}' not found on PATH")

    logger.info(f"Rendering {output_format} with {binary}")
    result = subprocess.run(
        [binary, f"-T{output_format}"],
        input=dot_text.encode("utf-8"),
        capture_output=True,
        check=False,
    )
    if result.returncode != 0:
        message = result.stderr.decode("utf-8", errors="replace").strip()
        raise RenderError(f"{executable} exited with code {result.returncode}: {message}")
    return result.stdout
