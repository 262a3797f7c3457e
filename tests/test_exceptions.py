from caddy_admin.exceptions import AdminApiError, CaddyAdminException, DecodeError, SettingsError


class TestCaddyAdminException:
    def test_is_exception(self) -> None:
        assert issubclass(CaddyAdminException, Exception)

    def test_subclasses(self) -> None:
        for cls in (AdminApiError, DecodeError, SettingsError):
            assert issubclass(cls, CaddyAdminException)


class TestAdminApiError:
    def test_message_includes_status_reason_and_body(self) -> None:
        err = AdminApiError(400, "Bad Request", '{"error":"loading config: unknown module"}')
        assert str(err) == '400 Bad Request: {"error":"loading config: unknown module"}'
        assert err.status_code == 400
        assert err.reason == "Bad Request"

    def test_message_without_body(self) -> None:
        assert str(AdminApiError(502, "Bad Gateway")) == "502 Bad Gateway"
