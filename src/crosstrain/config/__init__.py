"""Configuration layer: models, layered resolution, sources, and logging.

May import from domain.  Must never import from services, output, or commands.
The asset helpers that consume a resolved config are exported here.
"""

from crosstrain.config.mappings import apply_model_mapping, apply_tool_mapping, should_include_asset

__all__ = ["apply_model_mapping", "apply_tool_mapping", "should_include_asset"]
