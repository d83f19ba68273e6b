"""
LifecycleNarrator - Description composer for lifecycle events

Every event written to the log gets its human readable description here, so
the wording stays consistent between commands.
"""

from typing import Dict, List, Optional


class LifecycleNarrator:
    """
    Composes machine-generated descriptions for asset lifecycle events.
    """

    @staticmethod
    def asset_created(asset) -> str:
        return f"Asset {asset.asset_tag} created ({asset.category.value}: {asset.brand} {asset.model})"

    @staticmethod
    def asset_updated(changes: Dict[str, List]) -> str:
        if not changes:
            return "Asset details updated"
        return f"Asset details updated: {', '.join(sorted(changes))}"

    @staticmethod
    def condition_changed(old_condition, new_condition) -> str:
        return f"Condition changed: {old_condition.value} → {new_condition.value}"

    @staticmethod
    def status_changed(from_status, to_status, reason: Optional[str] = None) -> str:
        comment = f"Status changed: {from_status.value} → {to_status.value}"
        if reason:
            comment += f" | Reason: {reason}"
        return comment

    @staticmethod
    def location_changed(old_location, new_location) -> str:
        old_text = old_location.full_location if old_location else 'no location'
        new_text = new_location.full_location if new_location else 'no location'
        return f"Location changed: {old_text} → {new_text}"

    @staticmethod
    def assigned(employee, location=None, expected_return_date=None) -> str:
        comment = f"Assigned to {employee.full_name} ({employee.employee_number})"
        if location:
            comment += f" at {location.full_location}"
        if expected_return_date:
            comment += f", expected back {expected_return_date.strftime('%Y-%m-%d')}"
        return comment

    @staticmethod
    def returned(employee, return_notes: Optional[str] = None) -> str:
        comment = f"Returned by {employee.full_name} ({employee.employee_number})"
        if return_notes:
            comment += f" | Notes: {return_notes}"
        return comment

    @staticmethod
    def force_returned(employee, to_status) -> str:
        return (
            f"Assignment to {employee.full_name} ({employee.employee_number}) closed "
            f"because the asset was marked {to_status.value}"
        )

    @staticmethod
    def force_return_notes(to_status) -> str:
        return f"Closed automatically: asset status changed to {to_status.value}"

    @staticmethod
    def maintenance_started(reason: Optional[str] = None) -> str:
        comment = "Maintenance started"
        if reason:
            comment += f" | Reason: {reason}"
        return comment

    @staticmethod
    def support_ticket(ticket_number: str, description: Optional[str] = None) -> str:
        comment = f"Support ticket {ticket_number} recorded"
        if description:
            comment += f": {description}"
        return comment

    @staticmethod
    def asset_deleted(asset) -> str:
        return f"Asset {asset.asset_tag} deleted"
