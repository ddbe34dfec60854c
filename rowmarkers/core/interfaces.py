"""Collaborators the marker builder depends on."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class FieldValueAccessor(ABC):
    """Per-row access to the field values of a rendered listing."""
    
    @abstractmethod
    def get_field(self, row_index: int, field_id: str) -> Optional[str]:
        """
        Get the rendered output of a field.
        
        Args:
            row_index: Index of the row in the result set
            field_id: Identifier of the field on the listing
            
        Returns:
            Rendered markup or text, None if the row has no value
        """
        pass
    
    @abstractmethod
    def get_field_value(self, row_index: int, field_id: str) -> Any:
        """
        Get the formatted value of a field before it is rendered to markup.
        
        Args:
            row_index: Index of the row in the result set
            field_id: Identifier of the field on the listing
            
        Returns:
            Formatted value (a string or a list of strings), None if empty
        """
        pass


class EntityRenderer(ABC):
    """Renders a domain object with a named view mode."""
    
    @abstractmethod
    def render(self, entity: Any, view_mode: str, langcode: Optional[str] = None) -> str:
        """Render the entity to markup."""
        pass


class DisplayModeRepository(ABC):
    """Registry of view modes per entity type."""
    
    @abstractmethod
    def get_view_modes(self, entity_type_id: str) -> Dict[str, Dict[str, Any]]:
        """
        Get the view modes of an entity type.
        
        Returns:
            Mapping of view mode id to its definition (at least a ``label``)
        """
        pass
