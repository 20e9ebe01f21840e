#!/usr/bin/env python3
"""
Depuración de códigos de acceso expirados

Elimina los códigos cuya fecha de expiración ya pasó y los accesos
temporales otorgados con ellos. Pensado para ejecutarse desde cron.

    python scripts/purge_expired_codes.py --older-than-hours 24
    python scripts/purge_expired_codes.py --dry-run
"""

import argparse
import logging
import sys
from datetime import timedelta

from app.config.database import SessionLocal, init_db
from app.config.settings import settings
from app.core.clock import SystemClock
from app.core.logging_config import configure_logging
from app.modules.access_codes.service import AccessCodeService

logger = logging.getLogger("purge_expired_codes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Eliminar códigos de acceso expirados y sus accesos")
    parser.add_argument(
        "--older-than-hours",
        type=int,
        default=0,
        help="Solo códigos expirados hace al menos N horas (default: 0, todos los expirados)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Mostrar cuántos registros se eliminarían sin eliminarlos"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level)

    if args.older_than_hours < 0:
        logger.error("--older-than-hours no puede ser negativo")
        return 2

    init_db()

    clock = SystemClock()
    before = clock.now() - timedelta(hours=args.older_than_hours)

    db = SessionLocal()
    try:
        result = AccessCodeService(db, clock).purge_expired(before, dry_run=args.dry_run)
    finally:
        db.close()

    prefix = "[dry-run] " if result.dry_run else ""
    logger.info(
        f"{prefix}Corte {result.fecha_corte.isoformat()}: "
        f"{result.codigos_eliminados} códigos, {result.accesos_eliminados} accesos"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
