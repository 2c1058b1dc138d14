import yaml
from pathlib import Path

class FileIO:
    # md5kit package directory; data files shipped with the package live under it
    ROOT = Path(__file__).resolve().parent.parent

    @staticmethod
    def resolve(path: str | Path) -> Path:
        '''
        package-relative paths land under ROOT; absolute paths pass through
        '''
        p = Path(path)
        return p if p.is_absolute() else FileIO.ROOT / p

    @staticmethod
    def load_yaml(path: str | Path) -> dict | list | None:
        '''
        Parse one YAML document.

        Parameters:
        -----------
        path : str | Path
            Package-relative (e.g. `util/defaults.yaml`) or absolute path.

        Returns:
        --------
        dict | list | None
            The parsed document; None for an empty file.
        '''
        p = FileIO.resolve(path)

        with p.open('r', encoding = 'utf-8') as f:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f'{p}: invalid YAML ({e})') from e
