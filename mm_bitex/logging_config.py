import logging
from pathlib import Path
from datetime import datetime
from zoneinfo import ZoneInfo


def setup_logging(
    level: str = "INFO",
    component: str = "bitex",
    subdir: str = "default",
    base_dir: str | Path = "logs",
) -> Path:
    """
    Configure logging:
      - Console (stderr)
      - Daily log file in logs/<component>/<subdir>/YYYY-MM-DD.log (Berlin date)

    Returns:
      Path to the current daily log file.
    """

    log_dir = Path(base_dir) / component / subdir
    log_dir.mkdir(parents=True, exist_ok=True)
    date_str = datetime.now(ZoneInfo("Europe/Berlin")).strftime("%Y-%m-%d")
    log_path = log_dir / f"{date_str}.log"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setFormatter(fmt)
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    root.addHandler(fh)
    root.addHandler(sh)

    # aiohttp logs every connection at DEBUG; keep it quiet unless asked
    logging.getLogger("aiohttp").setLevel(max(root.level, logging.WARNING))
    return log_path
