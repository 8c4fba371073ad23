from __future__ import annotations

import argparse
import logging
import sys

from .config import get_settings
from .errors import EmergencyError
from .seed import seed_base
from .services import EmergencyApp

logger = logging.getLogger(__name__)


def cmd_departments(app: EmergencyApp, args: argparse.Namespace) -> None:
    for name in app.get_departments():
        dep = app.departments.get(name)
        print(f"{dep.name} | max {dep.max_patients}")


def cmd_professionals(app: EmergencyApp, args: argparse.Namespace) -> None:
    for pid in app.get_professionals(args.specialization):
        p = app.get_professional_by_id(pid)
        print(f"{p.id} | {p.surname} {p.name} | {p.period}")


def cmd_in_service(app: EmergencyApp, args: argparse.Namespace) -> None:
    for pid in app.get_professionals_in_service(args.specialization, args.period):
        print(pid)


def cmd_assign(app: EmergencyApp, args: argparse.Namespace) -> None:
    app.add_patient(args.fiscal_code, args.nome, args.cognome, args.data_nascita, args.motivo, args.accettazione)
    pro_id = app.assign_patient_to_professional(args.fiscal_code, args.specialization)
    print(f"Paziente {args.fiscal_code} assegnato a {pro_id}")
    if args.referto:
        r = app.save_report(pro_id, args.fiscal_code, args.accettazione, args.referto)
        print(f"Referto ID: {r.id}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="emergency-cli", description="CLI Pronto Soccorso (archivi in memoria)")
    p.add_argument("--professionisti", default=None, help="CSV id,name,surname,specialization,period")
    p.add_argument("--reparti", default=None, help="CSV name,maxPatients")
    p.add_argument("--demo", action="store_true", help="Carica i dati dimostrativi")
    sub = p.add_subparsers(required=True)

    p_dep = sub.add_parser("departments", help="Lista reparti")
    p_dep.set_defaults(func=cmd_departments)

    p_pro = sub.add_parser("professionals", help="Professionisti per specializzazione")
    p_pro.add_argument("specialization")
    p_pro.set_defaults(func=cmd_professionals)

    p_srv = sub.add_parser("in-service", help="Professionisti in servizio nel periodo")
    p_srv.add_argument("specialization")
    p_srv.add_argument("period", help="es: 2024-03-01 to 2024-03-15")
    p_srv.set_defaults(func=cmd_in_service)

    p_asg = sub.add_parser("assign", help="Accetta un paziente e lo assegna a un professionista")
    p_asg.add_argument("--fiscal-code", required=True)
    p_asg.add_argument("--specialization", required=True)
    p_asg.add_argument("--accettazione", required=True, help="Data accettazione yyyy-MM-dd")
    p_asg.add_argument("--nome", default="")
    p_asg.add_argument("--cognome", default="")
    p_asg.add_argument("--data-nascita", default="")
    p_asg.add_argument("--motivo", default="")
    p_asg.add_argument("--referto", default=None, help="Se presente, registra un referto")
    p_asg.set_defaults(func=cmd_assign)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    app = EmergencyApp(settings)
    try:
        if args.reparti:
            app.read_from_file_departments(args.reparti)
        if args.professionisti:
            app.read_from_file_professionals(args.professionisti)
        if args.demo:
            seed_base(app)
        args.func(app, args)
    except EmergencyError as e:
        logger.debug("Comando fallito", exc_info=True)
        print(f"Errore: {e}")
        return 1
    finally:
        app.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
