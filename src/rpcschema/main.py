import argparse
import json
import sys

from rpcschema.config.default import SchemaSettings
from rpcschema.errors import SchemaError
from rpcschema.log import configure_logging
from rpcschema.schemas import ApiDefinition
from rpcschema.server.service import SchemaService


def cmd_list(api: ApiDefinition, args: argparse.Namespace) -> int:
    if args.json:
        print(json.dumps(api.list_methods(), indent=2))
    else:
        for name in api.method_names():
            print(name)
    return 0


def cmd_show(api: ApiDefinition, args: argparse.Namespace) -> int:
    method = api.get_method(args.name)
    if method is None:
        print(f"error: no method named '{args.name}'", file=sys.stderr)
        return 1
    print(method.model_dump_json(by_alias=True, indent=2))
    return 0


def cmd_serve(api: ApiDefinition, args: argparse.Namespace) -> int:
    settings = SchemaSettings.resolve(
        api_path=args.api, log_level=args.log_level, host=args.host, port=args.port
    )
    SchemaService(api, settings=settings).run()
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Inspect and serve JSON-RPC API definitions")
    ap.add_argument('--api', help='path to the API definition JSON (default: $RPCSCHEMA_API_PATH)')
    ap.add_argument('--log-level', help='logging level (default: $RPCSCHEMA_LOG_LEVEL)')
    sub = ap.add_subparsers(dest='cmd', required=True)

    ap_l = sub.add_parser('list', help='list method names')
    ap_l.add_argument('--json', action='store_true', help='print per-method summary as JSON')
    ap_l.set_defaults(func=cmd_list)

    ap_s = sub.add_parser('show', help='print one method definition as JSON')
    ap_s.add_argument('name', help='method name')
    ap_s.set_defaults(func=cmd_show)

    ap_v = sub.add_parser('serve', help='serve the definition over HTTP')
    ap_v.add_argument('--host', help='bind address')
    ap_v.add_argument('--port', type=int, help='bind port')
    ap_v.set_defaults(func=cmd_serve)

    args = ap.parse_args(argv)
    settings = SchemaSettings.resolve(api_path=args.api, log_level=args.log_level)
    configure_logging(settings.log_level)

    try:
        api = ApiDefinition.load(settings.api_path)
    except SchemaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return args.func(api, args)


if __name__ == "__main__":
    sys.exit(main())
