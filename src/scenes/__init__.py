# scenes/__init__.py
from scenes.library import SCENES, SceneSetup, build_scene

__all__ = ["SCENES", "SceneSetup", "build_scene"]
