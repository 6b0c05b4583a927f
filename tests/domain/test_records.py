"""Tests for OptionRecord — required/optional field partition."""

from __future__ import annotations

import pytest
from pydantic import Field, ValidationError

from preludekit.domain.maybe import NOTHING, Just
from preludekit.domain.records import OptionRecord
from preludekit.errors import FieldAccessError, RecordDefinitionError


class Server(OptionRecord):
    host: str
    tls: bool
    port: int | None = None
    tags: list[str] | None = None


@pytest.fixture
def server() -> Server:
    return Server(host="localhost", tls=False, port=8080)


class TestPartition:
    def test_fields_are_partitioned(self) -> None:
        assert Server.required_fields() == frozenset({"host", "tls"})
        assert Server.optional_fields() == frozenset({"port", "tags"})

    def test_base_class_has_empty_partition(self) -> None:
        assert OptionRecord.required_fields() == frozenset()
        assert OptionRecord.optional_fields() == frozenset()

    def test_non_none_default_rejected(self) -> None:
        with pytest.raises(RecordDefinitionError, match="Broken.retries"):

            class Broken(OptionRecord):
                retries: int = 3

    def test_default_factory_rejected(self) -> None:
        with pytest.raises(RecordDefinitionError, match="default factory"):

            class Broken(OptionRecord):
                names: list[str] = Field(default_factory=list)

    def test_missing_required_field_fails_validation(self) -> None:
        with pytest.raises(ValidationError):
            Server(host="localhost")  # type: ignore[call-arg]

    def test_unknown_field_fails_validation(self) -> None:
        with pytest.raises(ValidationError):
            Server(host="localhost", tls=True, colour="red")  # type: ignore[call-arg]


class TestAccess:
    def test_present_fields(self, server: Server) -> None:
        assert server.get("host") == Just("localhost")
        assert server.get("port") == Just(8080)

    def test_absent_optional_field(self, server: Server) -> None:
        assert server.get("tags") is NOTHING

    def test_falsy_required_value_is_present(self, server: Server) -> None:
        assert server.get("tls") == Just(False)

    def test_unknown_label(self, server: Server) -> None:
        with pytest.raises(FieldAccessError, match="no field 'colour'"):
            server.get("colour")

    def test_present_fields_and_to_dict(self, server: Server) -> None:
        assert server.present_fields() == frozenset({"host", "tls", "port"})
        assert server.to_dict() == {"host": "localhost", "tls": False, "port": 8080}

    def test_from_mapping(self) -> None:
        record = Server.from_mapping({"host": "db", "tls": True})
        assert record.get("port") is NOTHING
        assert record.to_dict() == {"host": "db", "tls": True}


class TestUpdates:
    def test_set_returns_new_record(self, server: Server) -> None:
        updated = server.set("tags", ["a"])
        assert updated.get("tags") == Just(["a"])
        assert server.get("tags") is NOTHING

    def test_set_validates(self, server: Server) -> None:
        with pytest.raises(ValidationError):
            server.set("port", "not a port")

    def test_set_none_on_required_fails(self, server: Server) -> None:
        with pytest.raises(ValidationError):
            server.set("host", None)

    def test_delete_optional(self, server: Server) -> None:
        assert server.delete("port").get("port") is NOTHING

    def test_delete_required_rejected(self, server: Server) -> None:
        with pytest.raises(FieldAccessError, match="required"):
            server.delete("host")

    def test_modify_present(self, server: Server) -> None:
        assert server.modify("port", lambda p: p + 1).get("port") == Just(8081)

    def test_modify_absent_is_noop(self, server: Server) -> None:
        assert server.modify("tags", lambda t: [*t, "x"]) == server

    def test_frozen(self, server: Server) -> None:
        with pytest.raises(ValidationError):
            server.port = 1  # type: ignore[misc]
