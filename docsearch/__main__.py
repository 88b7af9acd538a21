"""Application entry point."""

import argparse
import logging
import shutil
from pathlib import Path

from .app.app import DocSearchApp
from .app.app_config import AppConfig
from .common.app import app_dirs
from .documents.text_document import open_document


def reset_all() -> None:
    """Delete the app data directory."""
    if app_dirs.app_data_dir.exists():
        shutil.rmtree(app_dirs.app_data_dir)
        print(f"App data directory deleted: {app_dirs.app_data_dir}")
    else:
        print(f"App data directory does not exist: {app_dirs.app_data_dir}")


def load_config() -> AppConfig:
    """Read the saved config, or the defaults if there is none."""
    if not app_dirs.app_config_path.exists():
        return AppConfig()
    return AppConfig.model_validate_json(app_dirs.app_config_path.read_text())


def setup_logging(config: AppConfig) -> None:
    """Log to a file so the terminal UI is left alone."""
    app_dirs.app_data_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=app_dirs.app_log_path,
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="DocSearch - search inside open documents")
    parser.add_argument("paths", nargs="*", type=Path, help="Text files or notebooks to open")
    parser.add_argument("--temp", action="store_true", help="Run in temporary mode")
    parser.add_argument("--reset", action="store_true", help="Delete all app data")

    args = parser.parse_args()

    if args.reset:
        reset_all()
        return

    if args.temp:
        app_dirs.use_temp_app_data_dir()

    if not args.paths:
        parser.error("no documents to open")

    config = load_config()
    setup_logging(config)
    documents = [open_document(path) for path in args.paths]

    app = DocSearchApp(documents, config)
    try:
        app.run()
    finally:
        app_dirs.app_config_path.parent.mkdir(parents=True, exist_ok=True)
        app_dirs.app_config_path.write_text(config.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
