"""
Tests for the asset status machine
"""
import pytest
from itam.buisness.lifecycle.errors import (
    AssetNotAvailableError,
    InvalidInputError,
    InvalidStateError,
    StatusTransitionError,
)
from itam.buisness.lifecycle.state_machine import AssetStatusMachine
from itam.data.core.enums import AssetStatus


def test_nothing_reaches_assigned_by_edit():
    for status in AssetStatus:
        if status == AssetStatus.ASSIGNED:
            continue
        assert AssetStatusMachine.can_transition(status, AssetStatus.ASSIGNED) is False


def test_assigned_only_leaves_for_out_of_service_statuses():
    allowed = {status for status in AssetStatus if AssetStatusMachine.can_transition(AssetStatus.ASSIGNED, status)}
    assert allowed - {AssetStatus.ASSIGNED} == {AssetStatus.UNDER_MAINTENANCE, AssetStatus.RETIRED, AssetStatus.LOST}


def test_retired_and_lost_are_not_terminal():
    assert AssetStatusMachine.can_transition(AssetStatus.RETIRED, AssetStatus.AVAILABLE)
    assert AssetStatusMachine.can_transition(AssetStatus.LOST, AssetStatus.AVAILABLE)


def test_same_status_is_always_allowed():
    for status in AssetStatus:
        assert AssetStatusMachine.can_transition(status, status)


def test_direct_assigned_edit_has_specific_message():
    with pytest.raises(StatusTransitionError) as excinfo:
        AssetStatusMachine.validate_transition(AssetStatus.AVAILABLE, AssetStatus.ASSIGNED)
    assert 'assign' in excinfo.value.message


def test_assigned_to_available_requires_return():
    with pytest.raises(InvalidStateError) as excinfo:
        AssetStatusMachine.validate_transition(AssetStatus.ASSIGNED, AssetStatus.AVAILABLE)
    assert 'return' in excinfo.value.message


@pytest.mark.parametrize('status', [AssetStatus.AVAILABLE, AssetStatus.UNDER_MAINTENANCE, AssetStatus.RETIRED])
def test_valid_initial_statuses(status):
    AssetStatusMachine.validate_initial(status)


@pytest.mark.parametrize('status', [AssetStatus.ASSIGNED, AssetStatus.LOST])
def test_invalid_initial_statuses(status):
    with pytest.raises(InvalidInputError):
        AssetStatusMachine.validate_initial(status)


@pytest.mark.parametrize('status', [s for s in AssetStatus if s != AssetStatus.AVAILABLE])
def test_only_available_assets_are_assignable(status):
    with pytest.raises(AssetNotAvailableError):
        AssetStatusMachine.validate_assignable(status)


def test_return_keeps_administrative_status():
    assert AssetStatusMachine.status_after_return(AssetStatus.ASSIGNED) == AssetStatus.AVAILABLE
    assert AssetStatusMachine.status_after_return(AssetStatus.LOST) == AssetStatus.LOST
