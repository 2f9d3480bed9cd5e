from pathlib import Path

from artapi.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_PATH = Path(__file__).parent / "prompts" / "analysis_prompt.txt"


def load_prompt(path: Path | None = None) -> str:
    """Load the image analysis prompt.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled analysis_prompt.txt.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_PATH
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load analysis prompt: {exc}") from exc
