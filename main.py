import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from urlvalues import Client, ConfigError, MarshalerOptions, URLValuesError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse cmdline arguments"""
    parser = argparse.ArgumentParser(
        description="Encode a JSON document as URL query parameters",
        usage="%(prog)s [options] [input]",
    )

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="JSON file to encode, '-' for stdin",
    )

    parser.add_argument("--configfile", help="JSON file of marshal options")

    parser.add_argument("--url", help="print the full URL for this base")

    parser.add_argument(
        "--brackets",
        dest="array_brackets",
        action="store_true",
        default=None,
        help="add [] to the keys of arrays",
    )

    parser.add_argument(
        "--delimiter",
        dest="array_delimiter",
        help="join array values with this delimiter",
    )

    parser.add_argument(
        "--int-bool",
        dest="int_bool",
        action="store_true",
        default=None,
        help="encode booleans as 1/0",
    )

    parser.add_argument(
        "--loglevel",
        help="logging level (default: WARNING)",
    )

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    if args.configfile:
        with open(args.configfile, "r", encoding="utf-8") as f:
            cfg = json.load(f)
        if not isinstance(cfg, dict):
            raise ConfigError(f"{args.configfile} must hold a JSON object")
    for key in ("array_brackets", "array_delimiter", "int_bool", "loglevel"):
        val = getattr(args, key)
        if val is not None:
            cfg[key] = val
    return cfg


def parse_level(name: Any) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ConfigError(f"unknown loglevel {name!r}")
    return level


def load_input(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format=(
            "%(asctime)s %(name)s:%(levelname)-5s "
            "[%(funcName)s:%(lineno)4d] %(message)s"
        ),
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger = logging.getLogger("urlvalues")

    try:
        cfg = load_config(args)
        logger.setLevel(parse_level(cfg.pop("loglevel", "WARNING")))
        options = MarshalerOptions.from_config(cfg)
        value = load_input(args.input)
        if args.url:
            client = Client(args.url, options, logger=logger)
            try:
                print(client.url("", value))
            finally:
                client.close()
            return 0
        values = options.marshal(value)
    except (URLValuesError, ValueError, OSError) as err:
        logger.error("%s", err)
        return 1

    print(values.encode() if values is not None else "")
    return 0


if __name__ == "__main__":
    sys.exit(main())
