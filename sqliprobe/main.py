import argparse
import sys

from sqliprobe.core.engine import Engine
from sqliprobe.core.errors import ProbeError
from sqliprobe.core.models import BodyType, Settings
from sqliprobe.parsers import payloads
from sqliprobe.reporters.console import Log


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sqliprobe",
        description="Blind SQL injection probe (time-based / error-based)")
    p.add_argument("url", help="Target URL")
    p.add_argument("-X", "--method", default="get", help="HTTP method (default: get)")
    p.add_argument("-H", "--header", dest="headers", action="append", default=[],
                   help="Header 'Key: value' (repeatable)")
    p.add_argument("-c", "--cookie", dest="cookies", action="append", default=[],
                   help="Cookie 'name=value' (repeatable)")
    p.add_argument("-p", "--param", dest="params", action="append", default=[],
                   help="Parameter to fuzz (repeatable)")
    p.add_argument("-d", "--data", action="append", default=[],
                   help="Static parameter 'key=value' (repeatable)")
    body = p.add_mutually_exclusive_group()
    body.add_argument("-j", "--json", action="store_true", help="JSON body")
    body.add_argument("-f", "--form", action="store_true", help="Form body")
    p.add_argument("-o", "--offset", type=int, default=0,
                   help="Time-based latency offset in ms (used when no samples are taken)")
    p.add_argument("-s", "--offset-samples", type=int, default=0,
                   help="Samples used to measure the average response time")
    p.add_argument("-n", "--no-filtering", action="store_true",
                   help="Do not use a vanilla request for error filtering")
    p.add_argument("-w", "--workers", type=int, default=4,
                   help="Number of simultaneous payload workers")
    p.add_argument("--time-payloads", help="Time-based payload file")
    p.add_argument("--error-payloads", help="Error-based payload file")
    p.add_argument("--errors", help="Error signature file")
    p.add_argument("--proxy", help="Proxy (ej: http://127.0.0.1:8080)")
    p.add_argument("--verify", action="store_true",
                   help="Verify TLS certificates (off by default)")
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    return p


def args_to_settings(args: argparse.Namespace) -> Settings:
    if args.json:
        body_type = BodyType.JSON
    elif args.form:
        body_type = BodyType.FORM
    else:
        body_type = BodyType.RAW

    return Settings(
        url=args.url,
        method=args.method,
        headers=tuple(args.headers),
        cookies=tuple(args.cookies),
        params=tuple(args.params),
        data=tuple(args.data),
        body_type=body_type,
        offset_samples=args.offset_samples,
        offset=args.offset,
        workers=args.workers,
        filtering=not args.no_filtering,
        proxy=args.proxy,
        verify_tls=args.verify,
    )


def _catalog(path, default):
    return payloads.load_file(path) if path else default()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log = Log(verbose=args.verbose)

    try:
        time_payloads = _catalog(args.time_payloads, payloads.time_based_payloads)
        error_payloads = _catalog(args.error_payloads, payloads.error_based_payloads)
        signatures = _catalog(args.errors, payloads.error_signatures)

        with Engine(args_to_settings(args), logger=log) as engine:
            engine.scan(time_payloads, error_payloads, signatures)
    except (OSError, UnicodeDecodeError) as exc:
        log.fail(f"Cannot read catalog: {exc}")
        return 1
    except ProbeError as exc:
        log.fail(f"{type(exc).__name__}: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
