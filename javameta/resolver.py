import logging
from typing import Callable, Iterable, Optional

from .common.errors import InvalidScopeIgnored
from .model.java import ResolvedPolicy, RuleEntry
from .model.schema import JavaRules
from .model.system import Architecture, Platform, Precedence

logger = logging.getLogger(__name__)


class RuleResolver:
    """
    Resolves the Java rules that apply to a platform and architecture.

    Entries are ranked by how specifically their scope matches:

    - Current platform, current architecture (ex. win32/x64)
    - Current platform, any architecture (ex. win32/all)
    - Any platform, any architecture (all/all)

    Every field of the policy (distribution, version, ram) is taken from the
    most specific entry that defines it, so partial entries compose. Within one
    precedence level the entry listed first wins. Fields no entry defines stay
    undefined and are left to the client.

    Entries scoped to every platform but a single architecture are ignored. Each
    one is logged and handed to on_invalid_scope, when given.
    """

    def __init__(
        self, on_invalid_scope: Optional[Callable[[InvalidScopeIgnored], None]] = None
    ):
        self.on_invalid_scope = on_invalid_scope

    def _ignore(self, entry: RuleEntry):
        diag = InvalidScopeIgnored(
            entry=entry,
            message=f"Ignoring rule scoped to {entry.scope}: an architecture requires a platform",
        )
        logger.warning(diag.message)
        if self.on_invalid_scope is not None:
            self.on_invalid_scope(diag)

    def resolve(
        self,
        entries: Iterable[RuleEntry],
        platform: Platform | str,
        architecture: Architecture | str,
    ) -> ResolvedPolicy:
        platform = Platform(platform)
        architecture = Architecture(architecture)
        if platform is Platform.All or architecture is Architecture.All:
            raise ValueError(
                f"Cannot resolve rules for a wildcard scope {platform}/{architecture}"
            )

        buckets: dict[Precedence, list[RuleEntry]] = {p: [] for p in Precedence}
        for entry in entries:
            if not entry.scope.is_valid():
                self._ignore(entry)
                continue
            precedence = entry.scope.precedence_for(platform, architecture)
            if precedence is None:
                continue
            entry.check_integrity()
            buckets[precedence].append(entry)

        policy = ResolvedPolicy(platform=platform, architecture=architecture)
        # lowest precedence first, each merge overrides what it defines
        for precedence in sorted(Precedence, reverse=True):
            for entry in reversed(buckets[precedence]):
                policy = policy.merge(entry.to_policy(platform, architecture))

        logger.debug(
            "Resolved Java rules for %s/%s, undefined: %s",
            platform,
            architecture,
            policy.undefined_fields(),
        )
        return policy

    def resolve_rules(
        self,
        rules: JavaRules,
        platform: Platform | str,
        architecture: Architecture | str,
    ) -> ResolvedPolicy:
        return self.resolve(rules.entries, platform, architecture)

    def resolve_host(self, rules: JavaRules) -> ResolvedPolicy:
        platform = Platform.current()
        architecture = Architecture.current()
        if platform is None or architecture is None:
            raise ValueError("Unsupported host platform or architecture")
        return self.resolve(rules.entries, platform, architecture)


def resolve(
    entries: Iterable[RuleEntry],
    platform: Platform | str,
    architecture: Architecture | str,
) -> ResolvedPolicy:
    return RuleResolver().resolve(entries, platform, architecture)
