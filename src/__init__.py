import tomllib
from pathlib import Path


def _get_project_meta() -> dict:
    toml_path = Path(__file__).parents[1] / 'pyproject.toml'
    with toml_path.open('rb') as f:
        return tomllib.load(f)['project']


__version__ = _get_project_meta()['version']
