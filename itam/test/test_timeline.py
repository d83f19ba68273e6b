"""
Tests for the timeline projection
"""
import pytest
from itam.buisness.lifecycle.errors import InvalidInputError, NotFoundError
from itam.buisness.lifecycle.timeline import BASE_CLASSIFICATION, TimelineProjector, classify
from itam.data.core.enums import AssetStatus, TimelineStatus, TimelineType


def types_of(entries):
    return [entry.type.value for entry in entries]


def test_every_type_has_a_classification():
    assert set(BASE_CLASSIFICATION) == set(TimelineType)
    for event_type in TimelineType:
        assert isinstance(classify(event_type), TimelineStatus)


def test_timeline_is_newest_first_after_assign_and_return(engine, officer, asset, employee):
    assignment = engine.assign(officer, asset.id, employee.id)
    engine.return_assignment(officer, assignment.id)

    entries = TimelineProjector.get_timeline(asset.id).to_list()

    assert types_of(entries) == ['Returned', 'Assigned', 'Created']
    assert [e.sequence for e in entries] == [3, 2, 1]
    # Same clock instant for every command; timestamps still strictly decrease
    assert entries[0].timestamp > entries[1].timestamp > entries[2].timestamp
    assert all(e.status == TimelineStatus.COMPLETED for e in entries)
    assert entries[1].employee_name == 'Dana Okafor'


def test_timeline_is_lazy_and_restartable(engine, officer, asset):
    timeline = TimelineProjector.get_timeline(asset.id)
    assert types_of(timeline) == ['Created']

    engine.change_condition(officer, asset.id, 'Good')

    assert types_of(timeline) == ['Updated', 'Created']
    assert types_of(timeline) == ['Updated', 'Created']


def test_limit_never_splits_a_command_group(engine, officer, asset, employee):
    engine.assign(officer, asset.id, employee.id)
    engine.update_asset(officer, asset.id, {'status': 'Retired'})

    def limited(limit):
        return types_of(TimelineProjector.get_timeline(asset.id, limit))

    assert limited(2) == []
    assert limited(3) == ['Returned', 'StatusChanged', 'Updated']
    assert limited(4) == ['Returned', 'StatusChanged', 'Updated', 'Assigned']
    assert limited(10) == ['Returned', 'StatusChanged', 'Updated', 'Assigned', 'Created']


def test_group_entries_share_a_group_key(engine, officer, asset, employee):
    engine.assign(officer, asset.id, employee.id)
    engine.update_asset(officer, asset.id, {'status': 'Lost'})

    entries = TimelineProjector.get_timeline(asset.id).to_list()
    assert len({e.group_key for e in entries[:3]}) == 1
    assert entries[3].group_key != entries[0].group_key


@pytest.mark.parametrize('limit', [0, -1, True, '3'])
def test_invalid_limit(asset, limit):
    with pytest.raises(InvalidInputError):
        TimelineProjector.get_timeline(asset.id, limit)


def test_unknown_asset(app):
    with pytest.raises(NotFoundError):
        TimelineProjector.get_timeline(999)


def test_deleted_asset_keeps_timeline(engine, admin, asset):
    engine.delete_asset(admin, asset.id)
    entries = TimelineProjector.get_timeline(asset.id).to_list()
    assert types_of(entries) == ['Deleted', 'Created']
    assert entries[0].status == TimelineStatus.ERROR


def test_lost_is_a_warning(engine, officer, asset):
    engine.update_asset(officer, asset.id, {'status': 'Lost'})
    entries = TimelineProjector.get_timeline(asset.id).to_list()
    status_changed = next(e for e in entries if e.type == TimelineType.STATUS_CHANGED)
    assert status_changed.status == TimelineStatus.WARNING


def test_open_maintenance_is_in_progress(engine, officer, asset):
    engine.update_asset(officer, asset.id, {'status': 'UnderMaintenance'})
    maintenance = TimelineProjector.get_timeline(asset.id).to_list()[0]
    assert maintenance.type == TimelineType.MAINTENANCE
    assert maintenance.status == TimelineStatus.IN_PROGRESS


def test_maintenance_pending_once_asset_returns_to_service(engine, officer, asset):
    engine.update_asset(officer, asset.id, {'status': 'UnderMaintenance'})
    engine.update_asset(officer, asset.id, {'status': 'Available'})

    entries = TimelineProjector.get_timeline(asset.id).to_list()
    maintenance = next(e for e in entries if e.type == TimelineType.MAINTENANCE)
    assert maintenance.status == TimelineStatus.PENDING


def test_maintenance_pending_when_asset_leaves_for_elsewhere(engine, officer, asset):
    engine.update_asset(officer, asset.id, {'status': 'UnderMaintenance'})
    engine.update_asset(officer, asset.id, {'status': 'Retired'})

    entries = TimelineProjector.get_timeline(asset.id).to_list()
    maintenance = next(e for e in entries if e.type == TimelineType.MAINTENANCE)
    assert maintenance.status == TimelineStatus.PENDING


def test_each_maintenance_spell_is_classified_separately(engine, officer):
    asset = engine.create_asset(officer, {
        'category': 'Printer', 'brand': 'HP', 'model': 'M404', 'status': 'UnderMaintenance',
    })
    engine.update_asset(officer, asset.id, {'status': 'Available'})
    engine.update_asset(officer, asset.id, {'status': 'UnderMaintenance'})

    entries = TimelineProjector.get_timeline(asset.id).to_list()
    spells = [e.status for e in entries if e.type == TimelineType.MAINTENANCE]
    assert spells == [TimelineStatus.IN_PROGRESS, TimelineStatus.PENDING]


def test_classify_status_changed():
    assert classify(TimelineType.STATUS_CHANGED, AssetStatus.LOST) == TimelineStatus.WARNING
    assert classify(TimelineType.STATUS_CHANGED, AssetStatus.RETIRED) == TimelineStatus.COMPLETED


def test_maintenance_only_in_progress_or_pending():
    assert classify(TimelineType.MAINTENANCE) == TimelineStatus.IN_PROGRESS
    for exit_status in AssetStatus:
        assert classify(TimelineType.MAINTENANCE, maintenance_exit=exit_status) == TimelineStatus.PENDING
    assert classify(TimelineType.MAINTENANCE, maintenance_exit='Deleted') == TimelineStatus.PENDING
