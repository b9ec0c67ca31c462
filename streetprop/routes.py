"""The page routes served by the web front end and parsing of command-line calls."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

_GET = frozenset({"GET", "HEAD"})
_POST = frozenset({"POST"})

_PARAM_RE = re.compile(r":(\w+)")
_WORD_RE = re.compile(r"[A-Z][a-z0-9]*|[a-z0-9]+")


class Access(str, Enum):
    """Who may open a route.

    LOGIN and ADMIN both require a logged-in session; anyone else is redirected to /.
    """

    PUBLIC = "public"
    LOGIN = "login"
    ADMIN = "admin"


def action_path(handler: str) -> str:
    """Path of a handler: its first word in lower case, a slash, then the rest in camel case."""
    words = _WORD_RE.findall(handler)
    if not words:
        raise ValueError(f"invalid handler name: {handler!r}")
    head, *rest = words
    if not rest:
        return head.lower()
    return f"{head.lower()}/{rest[0][:1].lower()}{rest[0][1:]}{''.join(rest[1:])}"


def _compile(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    pos = 0
    for match in _PARAM_RE.finditer(pattern):
        parts.append(re.escape(pattern[pos : match.start()]))
        parts.append(f"(?P<{match.group(1)}>[^/]+?)")
        pos = match.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts))


@dataclass(frozen=True)
class Route:
    """One page or endpoint: the methods and path it answers and what it shows."""

    methods: frozenset[str]
    pattern: str
    view: str | None = None
    title: str | None = None
    handler: str | None = None
    access: Access = Access.PUBLIC
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", _compile(self.pattern))

    @property
    def params(self) -> tuple[str, ...]:
        return tuple(_PARAM_RE.findall(self.pattern))

    def match(self, path: str) -> dict[str, str] | None:
        """Return the path parameters when path fits this route, otherwise None."""
        found = self._regex.fullmatch(path)
        return found.groupdict() if found else None


def _page(pattern: str, view: str, title: str | None = None,
          handler: str | None = None, access: Access = Access.PUBLIC) -> Route:
    return Route(_GET, pattern, view=view, title=title, handler=handler, access=access)


def _a(handler: str) -> str:
    return "/" + action_path(handler)


_ROUTES: tuple[Route, ...] = (
    _page("/", "Index", "Street", "UserProfile"),
    Route(_GET, _a("GuestExternalAuth"), handler="GuestExternalAuth"),
    _page(_a("GuestOauthCallback"), "GuestOauthCallback", None, "GuestOauthCallback"),
    _page(_a("GuestProperty") + "/:propId", "GuestPropertyPublic", None, "GuestProperty"),
    _page(_a("GuestVerifyEmail"), "GuestVerifyEmail", "Email Verification", "GuestVerifyEmail"),
    _page(_a("GuestResetPassword"), "GuestResetPassword", "Reset Password"),
    _page(_a("UserProperty") + "/:propId", "UserPropertyIndex", None, "UserProperty",
          Access.LOGIN),
    _page("/privacy", "Privacy", "HapSTR Privacy Policy"),
    _page("/tos", "Tos", "HapSTR Terms of Service"),
    _page("/buyer", "Buyer", "Buyer", None, Access.LOGIN),
    _page("/realtor", "Realtor", "Realtor", "RealtorOwnedProperties", Access.LOGIN),
    _page(_a("RealtorProperty"), "RealtorProperty", "Realtor Property", None, Access.LOGIN),
    _page(_a("RealtorProperty") + "/:propId", "RealtorProperty", "Realtor Property",
          "RealtorProperty", Access.LOGIN),
    _page("/realtor/ownedProperty/:propId", "RealtorOwnedProperty", None, "GuestProperty",
          Access.LOGIN),
    _page("/admin", "Admin", "Admin", "AdminDashboard", Access.ADMIN),
    _page(_a("AdminUsers"), "AdminUsers", "Users", "AdminUsers", Access.ADMIN),
    _page(_a("AdminPropertiesUS"), "AdminPropertiesUS", "Properties US", "AdminPropertiesUS",
          Access.ADMIN),
    _page(_a("AdminProperties"), "AdminProperties", "Properties", "AdminProperties",
          Access.ADMIN),
    _page(_a("AdminPropHistories"), "AdminPropHistories", "Prop Histories",
          "AdminPropHistories", Access.ADMIN),
    _page("/user", "User", "Profile", "UserSessionsActive", Access.LOGIN),
    # older spelling of the nearby facilities endpoint, still called by clients
    Route(_POST, "/user/nearbyFacilitites", handler="UserNearbyFacilities"),
    Route(_GET, _a("GuestAutoLogin"), handler="GuestAutoLogin"),
    _page(_a("AdminAccessLogs"), "AdminAccessLog", "Access Log", "AdminAccessLogs",
          Access.ADMIN),
    _page(_a("AdminFiles"), "AdminFiles", "Access Log", "AdminFiles", Access.ADMIN),
    Route(_GET, _a("GuestFiles") + "/:base62id-:modifier.:ext", handler="GuestFiles"),
    _page("/debug", "Debug"),
)


def static_routes() -> list[Route]:
    """All page routes in the order they are tried."""
    return list(_ROUTES)


def route_for(method: str, path: str) -> tuple[Route, dict[str, str]]:
    """Find the first route answering method and path; the query string is ignored.

    Raises LookupError when no route answers.
    """
    method = method.upper()
    bare = path.split("?", 1)[0]
    for route in _ROUTES:
        if method not in route.methods:
            continue
        params = route.match(bare)
        if params is not None:
            return route, params
    raise LookupError(f"no route for {method} {bare}")


def parse_cli_args(args: Sequence[str], commands: Iterable[str]) -> tuple[str, bytes]:
    """Split command-line arguments into the action and its JSON payload."""
    if len(args) < 1:
        raise ValueError(f"must start with one of: {list(commands)}")
    if len(args) < 2:
        raise ValueError("must provide json payload")
    return args[0], args[1].encode("utf-8")