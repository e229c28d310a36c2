"""
Help listing for datacube-sdk.

Renders the native methods and every catalog flow together with the paths
that reach it on a client. Listing order follows catalog order; it has no
influence on resolution.
"""

from __future__ import annotations

from datacube.sdk.registry import FlowCatalog
from datacube.sdk.spec import Flow, FlowKind

__all__ = ["NATIVE_METHODS", "flow_path", "help_entries", "render_help"]

NATIVE_METHODS: tuple[str, ...] = (
    "get_status()",
    "get_usage()",
    "me()",
    "execute(body)",
    "execution_status(execution_id)",
    "help()",
)

_CALL_ARGS = "(inputs={ ... }, version=None)"


def _segment(name: str) -> str:
    return f".{name}" if name.isidentifier() else f'["{name}"]'


def flow_path(flow: Flow) -> str | None:
    """
    Attribute path reaching ``flow`` by label, or ``None`` if it has no label.

    Keys or labels that are not Python identifiers (``99taxi``) are written
    as subscripts, and a provider key of that kind goes through
    ``client.namespace(...)``.
    """
    if not flow.label:
        return None
    label = _segment(flow.label)
    if flow.kind is FlowKind.TEAM and flow.team_key is not None:
        return f"client.teams{_segment(flow.team_key)}{label}"
    if flow.provider_key is not None:
        key = flow.provider_key
        if key.isidentifier():
            return f"client.{key}{label}"
        return f'client.namespace("{key}"){label}'
    return f"client{label}"


def help_entries(catalog: FlowCatalog) -> list[dict[str, str | None]]:
    """Structured form of the listing (one row per flow), for JSON output."""
    rows: list[dict[str, str | None]] = []
    for f in catalog.all_flows():
        rows.append(
            {
                "id": f.id,
                "name": f.display_name,
                "kind": f.kind.value,
                "group": f.team_key if f.kind is FlowKind.TEAM else f.provider_key,
                "recommended": f'client["{f.id}"]',
                "path": flow_path(f),
            }
        )
    return rows


def _flow_block(flow: Flow, indent: str) -> str:
    left = f"{indent}• {flow.display_name or '(unnamed)'} →"
    pad = " " * (len(left) + 1)
    out = f'{left} client["{flow.id}"]{_CALL_ARGS} [recommended]\n'
    path = flow_path(flow)
    if path is not None:
        out += f"{pad}{path}{_CALL_ARGS}\n"
    return out + "\n"


def render_help(catalog: FlowCatalog) -> str:
    """
    Render the full help text.

    Sections: native methods, personal flows, official (DataCube) flows,
    provider flows grouped by provider, team flows grouped by team.
    """
    out = "\nDataCube SDK Help\n"

    out += "\n NATIVE METHODS:\n"
    for m in NATIVE_METHODS:
        out += f"   • {m} → client.{m}\n"

    out += "\n FLOWS:\n"
    for f in catalog.personal_flows():
        out += _flow_block(f, "   ")

    out += "\n DATACUBE FLOWS:\n"
    for f in catalog.official_flows():
        out += _flow_block(f, "     ")

    out += "\n PROVIDER FLOWS:\n"
    for key, flows in catalog.provider_groups().items():
        out += f"\n   {key}:\n"
        for f in flows:
            out += _flow_block(f, "     ")

    out += "\n TEAM FLOWS:\n"
    for key, flows in catalog.team_groups().items():
        out += f"\n   teams.{key}:\n"
        for f in flows:
            out += _flow_block(f, "     ")

    return out
