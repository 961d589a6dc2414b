"""
Unit tests for coordinator registration and unregistration.
"""

import pytest

from fieldauth.errors import ErrorKind
from fieldauth.store import Member, utc_now


class TestRegister:
    """Tests for RegistrationService.register."""

    @pytest.mark.unit
    def test_register_new_coordinator(self, registration_service, credential_store, test_config):
        result = registration_service.register(test_config["coord_phone"], "Field1")

        assert result.success is True
        assert result.value.to_dict() == {"phoneNumber": test_config["coord_phone"], "projectName": "Field1"}

        stored = credential_store.find_coordinator_by_phone(test_config["coord_phone"])
        assert stored.project_name == "Field1"
        assert stored.token is None

    @pytest.mark.unit
    def test_project_name_is_decoded(self, registration_service, credential_store, test_config):
        result = registration_service.register(test_config["coord_phone"], "Forest%20Survey")

        assert result.value.project_name == "Forest Survey"
        assert credential_store.find_coordinator_by_project("Forest Survey") is not None

    @pytest.mark.unit
    def test_malformed_project_name_rejected(self, registration_service, credential_store, test_config):
        result = registration_service.register(test_config["coord_phone"], "100%")

        assert result.success is False
        assert result.error == ErrorKind.BAD_REQUEST
        assert credential_store.list_coordinators() == []

    @pytest.mark.unit
    def test_conflict_with_other_coordinator(self, registration_service, test_config):
        registration_service.register(test_config["coord_phone"], "Shared").unwrap()

        result = registration_service.register(test_config["other_coord_phone"], "Shared")

        assert result.success is False
        assert result.error == ErrorKind.CONFLICT
        assert result.message == "Project name already exists"

    @pytest.mark.unit
    def test_conflict_with_registry_project(self, registration_service, credential_store, test_config):
        result = registration_service.register(test_config["coord_phone"], "Existing%20Project")

        assert result.error == ErrorKind.CONFLICT
        assert credential_store.find_coordinator_by_phone(test_config["coord_phone"]) is None

    @pytest.mark.unit
    def test_reregister_overrides_previous_binding(self, registration_service, credential_store, test_config):
        registration_service.register(test_config["coord_phone"], "Alpha").unwrap()
        registration_service.register(test_config["coord_phone"], "Beta").unwrap()

        coordinators = credential_store.list_coordinators()
        assert len(coordinators) == 1
        assert coordinators[0].project_name == "Beta"
        assert credential_store.find_coordinator_by_project("Alpha") is None

    @pytest.mark.unit
    def test_reregister_same_project_does_not_self_conflict(self, registration_service, test_config):
        registration_service.register(test_config["coord_phone"], "Alpha").unwrap()

        result = registration_service.register(test_config["coord_phone"], "Alpha")

        assert result.success is True

    @pytest.mark.unit
    def test_reregister_discards_token(
        self, registration_service, credential_store, logged_in_coordinator, test_config
    ):
        registration_service.register(test_config["coord_phone"], "Other").unwrap()

        assert credential_store.find_coordinator_by_phone(test_config["coord_phone"]).token is None

    @pytest.mark.unit
    def test_failed_reregister_keeps_old_binding_deleted(self, registration_service, credential_store, test_config):
        """The previous binding is dropped before the conflict check runs."""
        registration_service.register(test_config["coord_phone"], "Alpha").unwrap()
        registration_service.register(test_config["other_coord_phone"], "Shared").unwrap()

        result = registration_service.register(test_config["coord_phone"], "Shared")

        assert result.error == ErrorKind.CONFLICT
        assert credential_store.find_coordinator_by_phone(test_config["coord_phone"]) is None

    @pytest.mark.unit
    def test_stored_names_stay_unique(self, registration_service, credential_store, project_registry):
        phones = ["+15550000001", "+15550000002", "+15550000003"]
        for phone in phones:
            registration_service.register(phone, "Same")
        registration_service.register("+15550000004", "Existing%20Project")

        names = [c.project_name for c in credential_store.list_coordinators()]
        registry_names = {p.name for p in project_registry.list_projects()}
        assert names == ["Same"]
        assert not set(names) & registry_names


class TestUnregister:
    """Tests for RegistrationService.unregister."""

    @pytest.mark.unit
    def test_unregister(self, registration_service, credential_store, test_config):
        registration_service.register(test_config["coord_phone"], "Field1").unwrap()

        result = registration_service.unregister(test_config["coord_phone"])

        assert result.success is True
        assert result.value.message == "Coordinator successfully unregistered"
        assert credential_store.find_coordinator_by_phone(test_config["coord_phone"]) is None

    @pytest.mark.unit
    def test_unregister_unknown(self, registration_service, test_config):
        result = registration_service.unregister(test_config["coord_phone"])

        assert result.error == ErrorKind.NOT_FOUND
        assert result.message == "Coordinator not found"

    @pytest.mark.unit
    def test_unregister_keeps_members(self, registration_service, credential_store, test_config):
        registration_service.register(test_config["coord_phone"], "Field1").unwrap()
        credential_store.save_member(Member(
            phone_number=test_config["member_phone"],
            token="member-token",
            coordinator_phone=test_config["coord_phone"],
            project_name="Field1",
            created_at=utc_now()
        ))

        registration_service.unregister(test_config["coord_phone"]).unwrap()

        member = credential_store.find_member_by_phone(test_config["member_phone"])
        assert member is not None
        assert member.project_name == "Field1"
