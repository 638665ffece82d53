"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Graph construction
    memory_label_length: int = 48
    draw_label_length: int = 28
    memory_radius: float = 8.0
    tag_radius: float = 12.0
    spawn_width: float = Field(
        default=800.0,
        description="Width of the box new nodes are dropped into (centered on origin)"
    )
    spawn_height: float = Field(
        default=600.0,
        description="Height of the box new nodes are dropped into (centered on origin)"
    )

    # Force simulation
    physics_centering: float = 0.005
    physics_repulsion: float = 3000.0
    physics_spring_length: float = 120.0
    physics_spring_k: float = 0.03
    physics_damping: float = 0.85
    physics_margin: float = Field(
        default=40.0,
        description="Distance kept between nodes and the stage edge"
    )
    physics_min_distance: float = Field(
        default=1.0,
        description="Floor applied to pairwise distances before division"
    )

    # Camera
    zoom_min: float = 0.2
    zoom_max: float = 4.0
    zoom_step: float = Field(
        default=1.1,
        description="Wheel zoom-in factor; zoom-out uses 2 - zoom_step"
    )

    # Interaction
    hit_padding: float = 6.0
    click_threshold: float = Field(
        default=4.0,
        description="Pointer travel in screen px below which a press counts as a click"
    )
    hit_grid_cell_size: float = Field(
        default=0.0,
        description="Uniform grid cell size for hit testing; 0 uses a linear scan"
    )

    # Frame loop
    frame_interval: float = 1 / 60
    physics_tick: float = 1 / 60
    max_steps_per_frame: int = 4

    # Rendering defaults
    default_theme: str = "dark"
    default_viewport_width: float = 800.0
    default_viewport_height: float = 600.0

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        hit_grid_cell_size=0.0,
        frame_interval=0.001,
        api_debug=True,
    )


# Global settings instance
settings = Settings()
