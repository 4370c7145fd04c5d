from typing import Dict, Iterable, List, Optional

from skilled.errors import UsageError

AGENT_DIRS: Dict[str, str] = {
    "claude": ".claude",
    "codex": ".codex",
}
ALL_AGENTS_ALIASES = ("all", "both")


def agent_dir_name(agent: str) -> str:
    return AGENT_DIRS[agent]


def select_agents(raw_values: Iterable[str], env_default: Optional[str] = None) -> List[str]:
    """
    Turn raw --agent tokens (repeatable, comma-separated) into a deduplicated agent list.
    Falls back to env_default, then to every supported agent.
    """
    values = list(raw_values)
    if not values and env_default and env_default.strip():
        values = [env_default]
    if not values:
        return list(AGENT_DIRS)

    selected: List[str] = []
    for raw in values:
        for part in raw.split(","):
            value = part.strip().lower()
            if not value:
                continue
            if value in ALL_AGENTS_ALIASES:
                candidates = list(AGENT_DIRS)
            elif value in AGENT_DIRS:
                candidates = [value]
            else:
                raise UsageError(f'Unsupported agent "{value}". Use claude, codex, or all')
            for agent in candidates:
                if agent not in selected:
                    selected.append(agent)

    if not selected:
        raise UsageError("--agent requires at least one non-empty value")
    return selected
