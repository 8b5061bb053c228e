"""
Target-language renderers for generated code.
"""

from .base import CodeRenderer
from .csharp import CSharpRenderer

RENDERERS: dict[str, type[CodeRenderer]] = {
    CSharpRenderer.target: CSharpRenderer,
}


def get_renderer(target: str = "csharp", **options) -> CodeRenderer:
    """
    Instantiate the renderer registered for a target language.

    Args:
        target: Renderer name (e.g. "csharp")
        **options: Renderer-specific options (e.g. context_name, namespace)

    Raises:
        ValueError: if no renderer is registered for the target
    """
    try:
        renderer_class = RENDERERS[target.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported target '{target}'. Available: {sorted(RENDERERS)}"
        ) from None
    return renderer_class(**options)


__all__ = ["CodeRenderer", "CSharpRenderer", "RENDERERS", "get_renderer"]
