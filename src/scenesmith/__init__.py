"""SceneSmith: Fountain screenplay structure and character enrichment.

SceneSmith turns Fountain screenplay text into scenes, speaking characters and
a classified token stream, extracts bounded per-character evidence for an LLM
prompt, and merges the returned profiles into character records without
overwriting anything a writer has already filled in.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
