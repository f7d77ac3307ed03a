"""Logging configuration for tubecast."""
import logging
from datetime import datetime, timedelta
from pathlib import Path


def setup_logging(log_dir: Path, retention_days: int = 30, verbose: bool = False) -> logging.Logger:
    """Configure dual logging handlers (file + console).

    Args:
        log_dir: Directory for log files (created if missing)
        retention_days: How many days of logs to keep
        verbose: If True, set console to DEBUG level
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    cleanup_old_logs(log_dir, retention_days)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove existing handlers (avoid duplicates)
    root_logger.handlers.clear()

    # File handler - one YYYY-MM-DD.log per run day, DEBUG level.
    # Retention is handled by cleanup_old_logs, which matches that name.
    log_file = log_dir / f"{datetime.now().strftime('%Y-%m-%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(file_handler)

    # Console handler - INFO level (or DEBUG if verbose)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter('[%(asctime)s] %(message)s', datefmt='%H:%M:%S'))
    root_logger.addHandler(console_handler)

    return root_logger


def cleanup_old_logs(log_dir: Path, retention_days: int) -> None:
    """Delete YYYY-MM-DD.log files older than retention_days."""
    if not log_dir.exists():
        return

    cutoff_date = datetime.now() - timedelta(days=retention_days)

    for log_file in log_dir.glob('*.log'):
        try:
            file_date = datetime.strptime(log_file.stem, '%Y-%m-%d')
        except ValueError:
            continue
        if file_date < cutoff_date:
            try:
                log_file.unlink()
            except OSError as exc:
                logging.warning("Could not delete old log file %s: %s", log_file.name, exc)
                continue
            logging.debug("Deleted old log file: %s", log_file.name)
