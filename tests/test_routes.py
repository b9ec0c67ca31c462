import pytest

from streetprop.routes import Access, Route, parse_cli_args, route_for, static_routes


def test_index_route():
    route, params = route_for("GET", "/")
    assert route.title == "Street"
    assert params == {}


def test_privacy_and_tos_titles():
    assert route_for("GET", "/privacy")[0].title == "HapSTR Privacy Policy"
    assert route_for("GET", "/tos")[0].title == "HapSTR Terms of Service"


def test_head_answers_get_routes():
    assert route_for("HEAD", "/tos")[0] is route_for("GET", "/tos")[0]


def test_query_string_ignored():
    route, _ = route_for("get", "/privacy?lang=en")
    assert route.view == "Privacy"


def test_owned_property_param():
    route, params = route_for("GET", "/realtor/ownedProperty/42")
    assert params == {"propId": "42"}
    assert route.access is Access.LOGIN


def test_admin_requires_admin():
    route, _ = route_for("GET", "/admin")
    assert route.access is Access.ADMIN
    assert route.title == "Admin"


def test_legacy_nearby_facilities_post_only():
    route, _ = route_for("POST", "/user/nearbyFacilitites")
    assert route.handler == "UserNearbyFacilities"
    with pytest.raises(LookupError):
        route_for("GET", "/user/nearbyFacilitites")


def test_files_route_params():
    files = next(r for r in static_routes() if r.handler == "GuestFiles")
    prefix = files.pattern.split(":", 1)[0]
    route, params = route_for("GET", prefix + "abc-1x2.png")
    assert route is files
    assert params == {"base62id": "abc", "modifier": "1x2", "ext": "png"}
    assert files.params == ("base62id", "modifier", "ext")


def test_files_route_rejects_post():
    files = next(r for r in static_routes() if r.handler == "GuestFiles")
    prefix = files.pattern.split(":", 1)[0]
    with pytest.raises(LookupError):
        route_for("POST", prefix + "abc-x.png")


def test_unknown_path():
    with pytest.raises(LookupError):
        route_for("GET", "/no/such/page")


def test_every_plain_route_finds_itself():
    for route in static_routes():
        if route.params:
            continue
        method = sorted(route.methods)[0]
        found, params = route_for(method, route.pattern)
        assert found.pattern == route.pattern
        assert params == {}


def test_param_routes_match_sample():
    for route in static_routes():
        if route.params != ("propId",):
            continue
        path = route.pattern.replace(":propId", "TW17")
        assert route.match(path) == {"propId": "TW17"}


def test_route_match_none():
    route = Route(frozenset({"GET"}), "/x/:id")
    assert route.match("/x/1/2") is None
    assert route.match("/x/7") == {"id": "7"}


def test_static_routes_returns_copy():
    routes = static_routes()
    routes.clear()
    assert len(static_routes()) > 0


def test_parse_cli_args_ok():
    assert parse_cli_args(["act", '{"a":1}'], ["act"]) == ("act", b'{"a":1}')


def test_parse_cli_args_missing_action():
    with pytest.raises(ValueError, match="must start with one of"):
        parse_cli_args([], ["one", "two"])


def test_parse_cli_args_missing_payload():
    with pytest.raises(ValueError, match="must provide json payload"):
        parse_cli_args(["one"], ["one"])