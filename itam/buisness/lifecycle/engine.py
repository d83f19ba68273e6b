"""
LifecycleEngine - Command boundary for the asset lifecycle

Every mutating command runs here: permission check, one context per command,
one database transaction per command. Domain errors roll the transaction back
and propagate unchanged; store-level conflicts are translated into
ConflictError.
"""

from datetime import datetime
from typing import Any, Callable, Dict, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.asset_info.assignment import Assignment
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.context import AssetLifecycleContext
from itam.buisness.lifecycle.errors import LifecycleDomainError, ConflictError, StaleAssetError
from itam.buisness.lifecycle.policies.permissions import Action, PermissionPolicy
from itam.utils.logger import get_logger
from itam.utils.time import utcnow

logger = get_logger("itam.lifecycle.engine")


class LifecycleEngine:
    """
    Sole writer of asset status and assignment state.

    Args:
        clock: Callable returning the current naive UTC datetime
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or utcnow

    # ========== Commands ==========

    def create_asset(self, caller: Caller, data: Dict[str, Any]) -> Asset:
        def work(now):
            ctx = AssetLifecycleContext.for_new_asset(caller, now)
            return ctx.asset_manager.create(data)
        return self._execute(caller, Action.CREATE, 'create_asset', work)

    def update_asset(self, caller: Caller, asset_id, patch: Dict[str, Any]) -> Asset:
        def work(now):
            ctx = AssetLifecycleContext.load(asset_id, caller, now)
            return ctx.asset_manager.update(patch)
        return self._execute(caller, Action.EDIT, 'update_asset', work, asset_id=asset_id)

    def delete_asset(self, caller: Caller, asset_id) -> Asset:
        def work(now):
            ctx = AssetLifecycleContext.load(asset_id, caller, now)
            return ctx.asset_manager.delete()
        return self._execute(caller, Action.DELETE, 'delete_asset', work, asset_id=asset_id)

    def assign(
        self,
        caller: Caller,
        asset_id,
        employee_id,
        location_id=None,
        expected_return_date=None,
        notes: Optional[str] = None
    ) -> Assignment:
        def work(now):
            ctx = AssetLifecycleContext.load(asset_id, caller, now)
            return ctx.assignment_manager.assign(employee_id, location_id, expected_return_date, notes)
        return self._execute(
            caller, Action.ASSIGN, 'assign', work,
            asset_id=asset_id, employee_id=employee_id
        )

    def return_assignment(
        self,
        caller: Caller,
        assignment_id,
        actual_return_date=None,
        return_notes: Optional[str] = None
    ) -> Assignment:
        def work(now):
            ctx, assignment = AssetLifecycleContext.for_assignment(assignment_id, caller, now)
            return ctx.assignment_manager.return_assignment(assignment, actual_return_date, return_notes)
        return self._execute(caller, Action.RETURN, 'return_assignment', work, assignment_id=assignment_id)

    def change_condition(self, caller: Caller, asset_id, condition) -> Asset:
        def work(now):
            ctx = AssetLifecycleContext.load(asset_id, caller, now)
            return ctx.asset_manager.change_condition(condition)
        return self._execute(caller, Action.EDIT, 'change_condition', work, asset_id=asset_id)

    def record_support_ticket(
        self,
        caller: Caller,
        asset_id,
        ticket_number,
        description: Optional[str] = None
    ) -> Asset:
        def work(now):
            ctx = AssetLifecycleContext.load(asset_id, caller, now)
            return ctx.asset_manager.record_support_ticket(ticket_number, description)
        return self._execute(caller, Action.EDIT, 'record_support_ticket', work, asset_id=asset_id)

    # ========== Transaction boundary ==========

    def _execute(self, caller: Caller, action: Action, command: str, work, **log_fields):
        """
        Run one command as one transaction.

        Raises:
            LifecycleDomainError: Any domain failure, after rollback
        """
        actor = getattr(caller, 'name', None)
        try:
            PermissionPolicy.check(caller, action)
            result = work(self.clock())
            db.session.commit()
        except LifecycleDomainError as e:
            db.session.rollback()
            logger.warning(f"{command} rejected ({e.kind}) for {actor}: {e.message} {log_fields}")
            raise
        except StaleDataError as e:
            db.session.rollback()
            logger.warning(f"{command} lost a concurrent update for {actor}: {e} {log_fields}")
            raise StaleAssetError(
                "The asset was changed by another request; reload and try again",
                **log_fields
            ) from e
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f"{command} hit a store constraint for {actor}: {e.orig} {log_fields}")
            raise ConflictError(
                "The change conflicts with existing data; reload and try again",
                **log_fields
            ) from e
        except Exception:
            db.session.rollback()
            logger.exception(f"{command} failed unexpectedly for {actor} {log_fields}")
            raise

        logger.info(f"{command} by {actor} succeeded {log_fields}")
        return result
