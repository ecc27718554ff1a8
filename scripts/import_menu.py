#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from order_engine.core.database import SessionLocal  # noqa: E402
from order_engine.core.exceptions import OrderEngineError  # noqa: E402
from order_engine.core.logging_setup import configure_logging  # noqa: E402
from order_engine.services.menu_import import import_menu  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Importa o cardápio externo de um merchant.")
    parser.add_argument("--environment", required=True, help="Environment ID (loja)")
    parser.add_argument("--merchant", required=True, help="ID do merchant no catálogo externo")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    db = SessionLocal()
    try:
        menu = asyncio.run(import_menu(db, args.environment, args.merchant))
    except OrderEngineError as exc:
        print(f"Import failed ({exc.status_code}): {exc.detail}")
        return 1
    finally:
        db.close()

    print(
        f"Menu imported: id={menu.id} status={menu.menu_status.value} "
        f"categories={len(menu.categories)}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
