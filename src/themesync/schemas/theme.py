"""
Theme schemas - Pydantic models for the remote theme document

Shape of GET/PUT scope-theme payloads. The customization body stays a loose
dict: field-level leniency is handled by Customization.from_dict().
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from themesync.models.animation import AnimationConfig
from themesync.models.customization import Customization


class KindToggle(BaseModel):
    """Persisted per-kind override"""
    id: str = Field(description="Kind id (e.g. 'turtle', 'eagle')")
    enabled: bool = Field(True, description="Kind shown or hidden")
    speed: float = Field(1.0, gt=0, description="Speed multiplier (1 = base speed)")


class BubbleToggle(BaseModel):
    enabled: bool = Field(True, description="Bubble pool shown or hidden")


class AnimationsPayload(BaseModel):
    """Persisted animation overrides (partial; merged with preset defaults)"""
    characters: List[KindToggle] = Field(default_factory=list)
    decorations: List[KindToggle] = Field(default_factory=list)
    bubbles: Optional[BubbleToggle] = None

    @classmethod
    def from_config(cls, config: AnimationConfig) -> "AnimationsPayload":
        return cls.model_validate(config.persisted())


class ThemeDocument(BaseModel):
    """Remote authoritative theme document for one scope"""
    base_theme: Optional[str] = Field(None, alias="baseTheme", description="Preset key the theme builds on")
    customization: Dict[str, Any] = Field(default_factory=dict, description="camelCase customization fields")
    animations: Optional[AnimationsPayload] = None
    animations_enabled: bool = Field(True, alias="animationsEnabled")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "baseTheme": "ocean-turtle",
                "customization": {"primaryColor": "#006064", "colorSpace": "HSV",
                                  "backgroundSaturationLimit": 70},
                "animations": {
                    "characters": [{"id": "turtle", "enabled": True, "speed": 1}],
                    "decorations": [{"id": "coral", "enabled": True, "speed": 1}],
                    "bubbles": {"enabled": True},
                },
                "animationsEnabled": True,
            }
        }

    @property
    def customization_record(self) -> Customization:
        return Customization.from_dict(self.customization)

    def animations_partial(self) -> Optional[Dict[str, Any]]:
        return self.animations.model_dump() if self.animations is not None else None

    def to_payload(self) -> Dict[str, Any]:
        """camelCase wire body"""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_payload(cls, data: Any) -> Optional["ThemeDocument"]:
        """None for an empty body ({} means the scope has no theme)"""
        if not isinstance(data, dict) or not data:
            return None
        return cls.model_validate(data)
