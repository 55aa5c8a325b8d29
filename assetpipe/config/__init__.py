from .load import load_config
from .model import PipelineConfig, AssetDir

__all__ = ["load_config", "PipelineConfig", "AssetDir"]
