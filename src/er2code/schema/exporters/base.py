"""
Rendering interface between the language-neutral plans and target source code.
"""

from abc import ABC, abstractmethod

from ..plans import EntityPlan, MappingPlan, ScalarType


class CodeRenderer(ABC):
    """Base class for all target-language renderers"""

    #: Name used to select the renderer from configuration
    target: str = ""

    @abstractmethod
    def type_name(self, scalar_type: ScalarType) -> str:
        """Target-language name of a scalar type"""
        pass

    @abstractmethod
    def render_entities(self, plans: list[EntityPlan]) -> str:
        """Render all entity classes as one source text"""
        pass

    @abstractmethod
    def render_mapping(self, plan: MappingPlan) -> str:
        """Render the mapping-context configuration as one source text"""
        pass
