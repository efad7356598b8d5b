from pathlib import Path

PACKAGE_PATH: Path = Path(__file__).resolve().parent.parent
ROOT_PATH: Path = PACKAGE_PATH.parent
LOGS_PATH: Path = (ROOT_PATH / 'logs').resolve()
