"""CLI entry point for meterform."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .app import MeterFormApp, create_app
from .capture.signature import FileSignaturePad
from .config import load_config
from .models import EnergyType, Session, energy_type_label


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="meterform",
        description="Zählererfassung: Zählerdaten erfassen und exportieren",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Pfad zur Konfigurationsdatei (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Debug-Ausgaben aktivieren"
    )

    sub = parser.add_subparsers(dest="command")

    reg_parser = sub.add_parser("register", help="Neuen Benutzer registrieren")
    reg_parser.add_argument("--name", type=str, default=None)
    reg_parser.add_argument("--email", type=str, default=None)

    sub.add_parser("logout", help="Benutzer abmelden")
    sub.add_parser("whoami", help="Angemeldeten Benutzer anzeigen")
    sub.add_parser("cameras", help="Verfügbare Kameras anzeigen")

    pending_parser = sub.add_parser("pending", help="Lokal gespeicherte Daten anzeigen")
    pending_parser.add_argument("--json", action="store_true", help="Ausgabe als JSON")

    search_parser = sub.add_parser(
        "search", help="Zähler nach Code oder Energieart suchen"
    )
    search_parser.add_argument("query", type=str)
    search_parser.add_argument(
        "--session", type=str, default=None, metavar="FILE",
        help="Sitzungsdatei (JSON); sonst lokal gespeicherte Daten",
    )
    search_parser.add_argument("--json", action="store_true", help="Ausgabe als JSON")

    collect_parser = sub.add_parser(
        "collect", help="Zähler mit Kamera, Scanner und Standort erfassen"
    )
    collect_parser.add_argument(
        "--out", "-o", type=str, required=True, metavar="FILE",
        help="Zieldatei für die erfasste Sitzung (JSON)",
    )
    collect_parser.add_argument(
        "--skip-photos", action="store_true", help="Keine Fotos aufnehmen"
    )

    submit_parser = sub.add_parser("submit", help="Sitzungsdatei exportieren")
    submit_parser.add_argument("session_file", type=str, metavar="SESSION_FILE")
    _add_submit_args(submit_parser)

    sync_parser = sub.add_parser(
        "sync", help="Lokal gespeicherte Daten erneut exportieren"
    )
    _add_submit_args(sync_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "cameras":
        _cmd_cameras()
        return

    config = load_config(args.config)
    app = create_app(config)
    try:
        asyncio.run(app.start())
        match args.command:
            case "register":
                _cmd_register(app, args)
            case "logout":
                app.logout()
                print("Abgemeldet.")
            case "whoami":
                _cmd_whoami(app)
            case "pending":
                _cmd_pending(app, args)
            case "search":
                _cmd_search(app, args)
            case "collect":
                ok = asyncio.run(_cmd_collect(app, args))
                if not ok:
                    sys.exit(1)
            case "submit":
                ok = asyncio.run(_cmd_submit(app, args))
                if not ok:
                    sys.exit(1)
            case "sync":
                ok = asyncio.run(_cmd_sync(app, args))
                if not ok:
                    sys.exit(1)
    finally:
        app.persistence.close()


def _add_submit_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--signature", type=str, default=None, metavar="IMAGE",
        help="Bilddatei der Unterschrift",
    )
    p.add_argument(
        "--complete", action="store_true",
        help="Bestätigen, dass alle Zähler vollständig erfasst wurden",
    )


def _cmd_cameras() -> None:
    from .capture.camera import MeterCamera

    cameras = MeterCamera.list_cameras()
    if not cameras:
        print("Keine Kamera gefunden.")
        return
    print(f"Verfügbare Kameras: {len(cameras)}")
    for idx in cameras:
        print(f"  Kamera {idx}")


def _cmd_register(app: MeterFormApp, args) -> None:
    kwargs = {}
    if args.name:
        kwargs["name"] = args.name
    if args.email:
        kwargs["email"] = args.email
    user = app.register(**kwargs)
    print(f"Willkommen, {user.name}")
    print(f"Ihr Benutzercode: {user.code}")


def _cmd_whoami(app: MeterFormApp) -> None:
    if app.user is None:
        print("Bitte registrieren Sie sich, um fortzufahren.")
        sys.exit(1)
    print(f"{app.user.name} <{app.user.email}>")
    print(f"Benutzercode: {app.user.code}")


def _cmd_pending(app: MeterFormApp, args) -> None:
    pending = app.coordinator.load_pending()
    if pending is None:
        print("Keine lokal gespeicherten Daten vorhanden.")
        return
    if args.json:
        print(json.dumps(pending.to_dict(), ensure_ascii=False, indent=2))
        return
    print(f"Firma: {pending.company_info.name}")
    print(f"Kontakt: {pending.contact_info.name} <{pending.contact_info.email}>")
    print(f"Erfasste Zähler: {len(pending.meters)}")


def _cmd_search(app: MeterFormApp, args) -> None:
    if args.session:
        app.store.reset(_read_session(args.session))
    results = app.search(args.query)

    if args.json:
        print(json.dumps([m.to_dict() for m in results], ensure_ascii=False, indent=2))
        return
    if not results:
        print("Keine Treffer.")
        return
    for meter in results:
        print(f"Code: {meter.scanned_code or '-'}")
        print(f"Energieart: {energy_type_label(meter.energy_type) or '-'}")


_COMPANY_PROMPTS = (
    ("name", "Firmenname"),
    ("street", "Straße"),
    ("street_number", "Hausnummer"),
    ("zip_code", "PLZ"),
    ("city", "Ort"),
)

_CONTACT_PROMPTS = (
    ("name", "Ansprechpartner"),
    ("email", "E-Mail"),
    ("phone", "Telefon"),
)


async def _ask(label: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    answer = (await asyncio.to_thread(input, f"{label}{suffix}: ")).strip()
    return answer or default


def _parse_energy_choice(text: str) -> EnergyType | str:
    wanted = text.strip().lower().replace("ae", "ä")
    for energy_type in EnergyType:
        if energy_type.value.lower() == wanted:
            return energy_type
    return text.strip()


async def _cmd_collect(app: MeterFormApp, args) -> bool:
    if app.user is None:
        print("Bitte registrieren Sie sich, um fortzufahren.", file=sys.stderr)
        return False

    company = app.session.company_info
    for field_name, label in _COMPANY_PROMPTS:
        app.update_company(field_name, await _ask(label, getattr(company, field_name)))
    contact = app.session.contact_info
    for field_name, label in _CONTACT_PROMPTS:
        app.update_contact(field_name, await _ask(label, getattr(contact, field_name)))

    while True:
        print(f"Zähler {len(app.session.meters) + 1}")
        if not args.skip_photos:
            await app.take_photo("meter_photo")
            await app.take_photo("distance_photo")
        await app.scan_code()
        await app.capture_location()
        choice = await _ask("Energieart (Strom/Wärme/Wasser)")
        app.set_energy_type(_parse_energy_choice(choice))
        app.add_meter()
        again = await _ask("Weiteren Zähler erfassen? (j/n)", "n")
        if again.lower() not in ("j", "ja", "y", "yes"):
            break

    out = Path(args.out).expanduser()
    out.write_text(
        json.dumps(app.session.to_dict(), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    for alert in app.alerts:
        print(f"{alert.title}: {alert.message}")
    print(f"{len(app.session.meters)} Zähler gespeichert: {out}")
    return True


async def _cmd_submit(app: MeterFormApp, args) -> bool:
    app.store.reset(_read_session(args.session_file))
    return await _submit(app, args)


async def _cmd_sync(app: MeterFormApp, args) -> bool:
    if not app.coordinator.has_pending():
        print("Keine lokal gespeicherten Daten vorhanden.")
        return True
    return await _submit(app, args)


async def _submit(app: MeterFormApp, args) -> bool:
    if app.user is None:
        print("Bitte registrieren Sie sich, um fortzufahren.", file=sys.stderr)
        return False

    app.set_complete(args.complete)
    if args.signature:
        app.devices.signature = FileSignaturePad(args.signature)
    await app.capture_signature()
    ok = await app.submit()

    for alert in app.alerts:
        print(f"{alert.title}: {alert.message}")
    return ok


def _read_session(path: str) -> Session:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return Session.from_dict(data)
