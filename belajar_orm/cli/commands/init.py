"""init command - Write the default configuration file."""

import logging
from pathlib import Path

logger = logging.getLogger("belajar-orm")

DEFAULT_DB_YAML = """\
host: localhost
port: 5432
user: postgres
password: postgres
database: belajar_orm
echo: false
"""


def init() -> None:
    """Write a default db.yaml to the configured directory.

    An existing file is left untouched.

    Examples:
      belajar-orm init
      belajar-orm --config-path=/my/configs init
    """
    import belajar_orm.cli as cli

    config_dir = cli.CONFIG_PATH or Path.cwd() / "configs"
    local_path = config_dir / "db.yaml"
    logger.info(f"Initializing configuration files in {config_dir}")

    if local_path.exists():
        logger.info("  [skip] db.yaml (already exists)")
        return

    config_dir.mkdir(parents=True, exist_ok=True)
    local_path.write_text(DEFAULT_DB_YAML)
    logger.info(
        "  [ok] db.yaml"
        "\nNext steps:"
        "\n  1. Edit configs/db.yaml with your database credentials"
        "\n  2. Create the database: belajar-orm db create"
        "\n  3. Create the tables: belajar-orm db migrate"
    )
