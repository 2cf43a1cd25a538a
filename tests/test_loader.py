"""Route loader tests."""

import json
import os.path

import pytest
from regexroute_core.dispatch.dispatcher import Dispatcher
from regexroute_core.gateway.request import Request
from regexroute_core.gateway.server import Gateway
from regexroute_core.routing.matcher import PatternError
from regexroute_core.utils.config import Config
from regexroute_core.utils.loader import (
    RouteLoadError,
    import_handler,
    load_route_definitions,
    parse_route_definitions,
    register_routes,
)

VIEWS = '''
def show_user(request, response, captures):
    response.write("user " + captures[0])


def fallback(request, response, captures):
    response.status = 404
    response.write("fallback")
'''


@pytest.fixture
def views_module(tmp_path, monkeypatch):
    """Importable handler module."""
    (tmp_path / "route_views.py").write_text(VIEWS)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "route_views"


class TestImportHandler:
    """Test import_handler."""

    def test_import_function(self):
        """Test importing a module-level function."""
        assert import_handler("os.path:basename") is os.path.basename

    def test_import_dotted_attribute(self):
        """Test dotted attribute paths."""
        assert import_handler("json:JSONDecoder.decode") is json.JSONDecoder.decode

    def test_bad_format(self):
        """Test specs without a colon."""
        with pytest.raises(RouteLoadError):
            import_handler("os.path.basename")

    def test_missing_module(self):
        """Test unknown modules."""
        with pytest.raises(RouteLoadError):
            import_handler("no_such_module_xyz:handler")

    def test_missing_attribute(self):
        """Test unknown attributes."""
        with pytest.raises(RouteLoadError):
            import_handler("os.path:no_such_function")

    def test_not_callable(self):
        """Test non-callable targets."""
        with pytest.raises(RouteLoadError):
            import_handler("os:sep")


class TestParseDefinitions:
    """Test parse_route_definitions."""

    def test_mapping_and_list(self):
        """Test both accepted shapes."""
        entry = {"pattern": "/a", "handler": "os.path:basename", "name": "a"}
        from_mapping = parse_route_definitions({"routes": [entry]})
        from_list = parse_route_definitions([entry])

        assert from_mapping == from_list
        assert from_list[0].name == "a"

    def test_empty(self):
        """Test missing routes."""
        assert parse_route_definitions(None) == []
        assert parse_route_definitions({}) == []

    def test_missing_pattern(self):
        """Test entries need a pattern."""
        with pytest.raises(RouteLoadError):
            parse_route_definitions([{"handler": "os.path:basename"}])

    def test_routes_not_a_list(self):
        """Test routes must be a list."""
        with pytest.raises(RouteLoadError):
            parse_route_definitions({"routes": "nope"})


class TestLoadRoutes:
    """Test loading and registering route files."""

    def test_yaml_file_order(self, tmp_path, views_module):
        """Test routes register in file order."""
        path = tmp_path / "routes.yaml"
        path.write_text(
            "routes:\n"
            f"  - pattern: '/user/([0-9]+)'\n"
            f"    handler: '{views_module}:show_user'\n"
            f"  - pattern: '.*'\n"
            f"    handler: '{views_module}:fallback'\n"
        )

        dispatcher = Dispatcher()
        count = register_routes(dispatcher, load_route_definitions(str(path)))

        assert count == 2
        assert [r.pattern for r in dispatcher.table] == ["/user/([0-9]+)", ".*"]
        assert dispatcher.resolve("/user/3").captures == ["3"]
        assert dispatcher.resolve("/other").route.index == 1

    def test_json_file(self, tmp_path, views_module):
        """Test JSON route files."""
        path = tmp_path / "routes.json"
        path.write_text(json.dumps({
            "routes": [{"pattern": "/u/(\\d+)", "handler": f"{views_module}:show_user"}],
        }))

        assert load_route_definitions(str(path))[0].pattern == "/u/(\\d+)"

    def test_missing_file(self, tmp_path):
        """Test missing route files."""
        with pytest.raises(RouteLoadError):
            load_route_definitions(str(tmp_path / "absent.yaml"))

    def test_invalid_yaml(self, tmp_path):
        """Test unparsable route files."""
        path = tmp_path / "routes.yaml"
        path.write_text("routes: [unclosed\n")
        with pytest.raises(RouteLoadError):
            load_route_definitions(str(path))

    def test_invalid_pattern_in_file(self, views_module):
        """Test bad patterns fail at registration."""
        definitions = parse_route_definitions(
            [{"pattern": "/user/(", "handler": f"{views_module}:show_user"}]
        )
        with pytest.raises(PatternError):
            register_routes(Dispatcher(), definitions)

    def test_gateway_from_config(self, tmp_path, views_module):
        """Test file routes come before inline routes."""
        path = tmp_path / "routes.yaml"
        path.write_text(
            "routes:\n"
            f"  - pattern: '/user/([0-9]+)'\n"
            f"    handler: '{views_module}:show_user'\n"
        )
        config = Config(
            routes_file=str(path),
            routes=[{"pattern": ".*", "handler": f"{views_module}:fallback"}],
        )

        gateway = Gateway.from_config(config)

        assert gateway.handle_request(Request(method="GET", path="/user/8")).body == b"user 8"
        response = gateway.handle_request(Request(method="GET", path="/x"))
        assert response.status == 404
        assert response.body == b"fallback"


class TestRegisterAtomic:
    """Test that failed registration adds nothing."""

    def test_bad_handler_in_later_entry(self, views_module):
        """Test an import failure leaves earlier entries unregistered."""
        definitions = parse_route_definitions([
            {"pattern": "/a", "handler": "os.path:basename"},
            {"pattern": "/b", "handler": "no_such_module_xyz:handler"},
        ])
        dispatcher = Dispatcher()

        with pytest.raises(RouteLoadError):
            register_routes(dispatcher, definitions)

        assert len(dispatcher) == 0

    def test_bad_pattern_in_later_entry(self):
        """Test a pattern failure leaves earlier entries unregistered."""
        definitions = parse_route_definitions([
            {"pattern": "/a", "handler": "os.path:basename"},
            {"pattern": "/b(", "handler": "os.path:basename"},
        ])
        dispatcher = Dispatcher()

        with pytest.raises(PatternError):
            register_routes(dispatcher, definitions)

        assert len(dispatcher) == 0

    def test_gateway_from_config_bad_inline_route(self, tmp_path, views_module):
        """Test file routes are not kept when an inline route fails."""
        path = tmp_path / "routes.yaml"
        path.write_text(
            "routes:\n"
            f"  - pattern: '/user/([0-9]+)'\n"
            f"    handler: '{views_module}:show_user'\n"
        )
        config = Config(
            routes_file=str(path),
            routes=[{"pattern": ".*", "handler": f"{views_module}:missing"}],
        )

        with pytest.raises(RouteLoadError):
            Gateway.from_config(config)


class TestUnreadableFiles:
    """Test file errors surface as RouteLoadError."""

    def test_undecodable_yaml(self, tmp_path):
        """Test invalid UTF-8 in a YAML route file."""
        path = tmp_path / "routes.yaml"
        path.write_bytes(b"routes:\n  - pattern: '/\xff\xfe'\n    handler: 'os.path:basename'\n")

        with pytest.raises(RouteLoadError):
            load_route_definitions(str(path))

    def test_undecodable_json(self, tmp_path):
        """Test invalid UTF-8 in a JSON route file."""
        path = tmp_path / "routes.json"
        path.write_bytes(b'{"routes": [{"pattern": "/\xff", "handler": "os.path:basename"}]}')

        with pytest.raises(RouteLoadError):
            load_route_definitions(str(path))

    def test_os_error(self, tmp_path, monkeypatch):
        """Test read errors are wrapped."""
        path = tmp_path / "routes.yaml"
        path.write_text("routes: []\n")

        def deny(*args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr("builtins.open", deny)
        with pytest.raises(RouteLoadError):
            load_route_definitions(str(path))
