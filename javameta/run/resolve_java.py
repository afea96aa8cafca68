import argparse
import json
import logging
import sys

import pydantic
import requests

from javameta.common import is_url
from javameta.common.errors import InvalidScopeIgnored, JavaMetaError
from javameta.model.schema import JavaRules
from javameta.model.system import Architecture, Platform
from javameta.resolver import RuleResolver


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Resolve the Java rules of a distribution for a platform"
    )
    parser.add_argument("source", help="path or http(s) URL of the Java rules document")
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform if p is not Platform.All],
        help="platform to resolve for (default: this host)",
    )
    parser.add_argument(
        "--arch",
        choices=[a.value for a in Architecture if a is not Architecture.All],
        help="architecture to resolve for (default: this host)",
    )
    parser.add_argument("--output", help="write the resolved policy to this file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.ERROR)

    platform = args.platform or Platform.current()
    architecture = args.arch or Architecture.current()
    if platform is None or architecture is None:
        print("Could not detect this host, pass --platform and --arch", file=sys.stderr)
        return 2

    ignored: list[InvalidScopeIgnored] = []
    resolver = RuleResolver(on_invalid_scope=ignored.append)

    try:
        if is_url(args.source):
            print(f"Fetching Java rules from {args.source}", file=sys.stderr)
            rules = JavaRules.from_url(args.source)
        else:
            rules = JavaRules.from_file(args.source)
        policy = resolver.resolve_rules(rules, platform, architecture)
    except (JavaMetaError, pydantic.ValidationError) as e:
        print(f"Invalid Java rules: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Java rules are not valid JSON: {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Could not fetch Java rules: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Could not read Java rules: {e}", file=sys.stderr)
        return 1

    for diag in ignored:
        print(diag.message, file=sys.stderr)

    if args.output:
        policy.write(args.output)
    else:
        print(policy.model_dump_json())

    undefined = policy.undefined_fields()
    if undefined:
        print(f"Left to the launcher: {', '.join(undefined)}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
