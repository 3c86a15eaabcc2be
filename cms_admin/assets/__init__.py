from .manifest import (
    AssetManifest,
    AssetQueue,
    InMemoryAssetQueue,
    ScriptAsset,
    StyleAsset,
    admin_context,
    facing_matches,
)

__all__ = [
    "AssetManifest",
    "AssetQueue",
    "InMemoryAssetQueue",
    "ScriptAsset",
    "StyleAsset",
    "admin_context",
    "facing_matches",
]
