import os
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from skilled.errors import MissingSkillsDirError

ABSENT = "absent"
SYMLINK = "symlink"
DIRECTORY = "directory"
OTHER = "other"

ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_SKIP_EJECTED = "skip-ejected"
ACTION_SKIP_OTHER = "skip-other"
ACTION_NONE = "none"

SKILLS_SUBDIR = "skills"


@dataclass(frozen=True)
class EntryState:
    """What occupies a link slot. resolved_target is only set for symlinks."""

    kind: str
    resolved_target: Optional[str] = None


@dataclass
class SyncStats:
    linked: int = 0
    updated: int = 0
    skipped_ejected: int = 0
    skipped_other: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SyncResult:
    agent_skills_dir: str
    stats: SyncStats = field(default_factory=SyncStats)


def normalize_path(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


def resolve_link_text(link_path: str, raw_target: str) -> str:
    """
    Absolute form of a symlink's raw target, read relative to the link's own directory.
    """
    return normalize_path(os.path.join(os.path.dirname(link_path), raw_target))


def relative_link_target(link_path: str, target: str) -> str:
    return os.path.relpath(target, os.path.dirname(link_path))


def classify_entry(state: EntryState, canonical_target: str) -> str:
    if state.kind == ABSENT:
        return ACTION_CREATE
    if state.kind == DIRECTORY:
        return ACTION_SKIP_EJECTED
    if state.kind == SYMLINK:
        if state.resolved_target == normalize_path(canonical_target):
            return ACTION_NONE
        return ACTION_UPDATE
    return ACTION_SKIP_OTHER


class LinkTree:
    """
    Minimal interface over the filesystem operations the synchronizer needs.
    Paths are absolute strings.
    """

    def inspect(self, path: str) -> EntryState:
        raise NotImplementedError

    def is_dir(self, path: str) -> bool:
        raise NotImplementedError

    def list_subdirs(self, path: str) -> List[str]:
        raise NotImplementedError

    def make_dirs(self, path: str) -> None:
        raise NotImplementedError

    def symlink(self, raw_target: str, link_path: str) -> None:
        raise NotImplementedError

    def unlink(self, link_path: str) -> None:
        raise NotImplementedError


class LocalLinkTree(LinkTree):
    def inspect(self, path: str) -> EntryState:
        if not os.path.lexists(path):
            return EntryState(ABSENT)
        if os.path.islink(path):
            return EntryState(SYMLINK, resolve_link_text(path, os.readlink(path)))
        if os.path.isdir(path):
            return EntryState(DIRECTORY)
        return EntryState(OTHER)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_subdirs(self, path: str) -> List[str]:
        names: List[str] = []
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    names.append(entry.name)
        return names

    def make_dirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def symlink(self, raw_target: str, link_path: str) -> None:
        os.symlink(raw_target, link_path, target_is_directory=True)

    def unlink(self, link_path: str) -> None:
        os.unlink(link_path)


def list_skills(skills_dir: str, tree: Optional[LinkTree] = None) -> List[str]:
    tree = tree or LocalLinkTree()
    if not tree.is_dir(skills_dir):
        raise MissingSkillsDirError(skills_dir)
    return sorted(tree.list_subdirs(skills_dir))


def agent_skills_dir(project_root: str, agent_dir: str) -> str:
    return os.path.join(project_root, agent_dir, SKILLS_SUBDIR)


def plan_agent_skills(
    project_root: str,
    skills_dir: str,
    agent_dir: str,
    tree: Optional[LinkTree] = None,
) -> Dict[str, str]:
    """
    Map each skill name to the action a sync would take, without touching anything.
    """
    tree = tree or LocalLinkTree()
    links_dir = agent_skills_dir(project_root, agent_dir)
    plan: Dict[str, str] = {}
    for skill in list_skills(skills_dir, tree):
        state = tree.inspect(os.path.join(links_dir, skill))
        plan[skill] = classify_entry(state, os.path.join(skills_dir, skill))
    return plan


def _link(tree: LinkTree, link_path: str, target: str) -> None:
    tree.symlink(relative_link_target(link_path, target), link_path)


def sync_agent_skills(
    project_root: str,
    skills_dir: str,
    agent_dir: str,
    tree: Optional[LinkTree] = None,
) -> SyncResult:
    tree = tree or LocalLinkTree()
    skills = list_skills(skills_dir, tree)
    links_dir = agent_skills_dir(project_root, agent_dir)
    tree.make_dirs(links_dir)

    result = SyncResult(agent_skills_dir=links_dir)
    stats = result.stats
    for skill in skills:
        target = os.path.join(skills_dir, skill)
        link_path = os.path.join(links_dir, skill)
        action = classify_entry(tree.inspect(link_path), target)
        if action == ACTION_CREATE:
            _link(tree, link_path, target)
            stats.linked += 1
        elif action == ACTION_UPDATE:
            tree.unlink(link_path)
            _link(tree, link_path, target)
            stats.updated += 1
        elif action == ACTION_SKIP_EJECTED:
            stats.skipped_ejected += 1
        elif action == ACTION_SKIP_OTHER:
            stats.skipped_other += 1
    return result


def sync_skills(
    project_root: str,
    skills_dir: str,
    agent_dirs: List[str],
    tree: Optional[LinkTree] = None,
) -> List[SyncResult]:
    """
    Sync every agent in order. A missing canonical skills dir aborts before any agent is touched.
    """
    tree = tree or LocalLinkTree()
    if not tree.is_dir(skills_dir):
        raise MissingSkillsDirError(skills_dir)
    return [sync_agent_skills(project_root, skills_dir, agent_dir, tree) for agent_dir in agent_dirs]
