class UsageError(Exception):
    """Bad or missing command-line argument."""


class MissingSkillsDirError(FileNotFoundError):
    def __init__(self, skills_dir: str):
        super().__init__(f"core skills directory not found: {skills_dir}")
        self.skills_dir = skills_dir
