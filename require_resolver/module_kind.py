"""Logic for tagging a module by its role."""

from require_resolver.candidate_record import CandidateRecord

WALLY_MARKERS = ("packages/", "_index/", "serverpackages/", "devpackages/")


def is_wally_package(record: CandidateRecord) -> bool:
    """Return True if the module lives in a Wally packages folder."""
    rel = record.relative_display_path.lower().replace("\\", "/")
    return any(rel.startswith(m) or f"/{m}" in rel for m in WALLY_MARKERS)


def module_kind(record: CandidateRecord) -> str:
    """Classify a module for display: name hints first, then location."""
    name = record.display_name.lower()
    path = record.logical_path.lower()

    if is_wally_package(record):
        return "Wally"
    if "service" in name:
        return "Service"
    if "controller" in name:
        return "Controller"
    if "component" in name:
        return "Component"
    if "util" in name or "helper" in name:
        return "Utility"
    if "serverscriptservice" in path or "serverstorage" in path:
        return "Server"
    if "starterplayerscripts" in path or "startergui" in path:
        return "Client"
    if "replicatedstorage" in path:
        return "Shared"
    return "Module"
