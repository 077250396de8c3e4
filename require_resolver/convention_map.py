"""Folder naming conventions used when no sourcemap or project file matches."""

# First path segment (lower-cased) -> service path; dotted values expand to
# several segments.
DEFAULT_CONVENTION_MAP: dict[str, str] = {
    "src": "ReplicatedStorage",
    "server": "ServerScriptService",
    "client": "StarterPlayer.StarterPlayerScripts",
    "shared": "ReplicatedStorage.Shared",
    "replicated": "ReplicatedStorage",
    "replicatedstorage": "ReplicatedStorage",
    "serverscriptservice": "ServerScriptService",
    "serverstorage": "ServerStorage",
    "starterplayer": "StarterPlayer",
    "startergui": "StarterGui",
    "lighting": "Lighting",
    "workspace": "Workspace",
}

KNOWN_SERVICES = frozenset(
    {
        "ReplicatedStorage",
        "ReplicatedFirst",
        "ServerScriptService",
        "ServerStorage",
        "StarterPlayer",
        "StarterGui",
        "StarterPack",
        "Lighting",
        "Workspace",
        "Players",
        "Teams",
        "SoundService",
        "Chat",
        "TextChatService",
    }
)


def build_convention_map(overrides: dict[str, str] | None = None) -> dict[str, str]:
    """Return the default convention table with user overrides applied."""
    table = dict(DEFAULT_CONVENTION_MAP)
    for key, value in (overrides or {}).items():
        table[str(key).lower()] = str(value)
    return table
