"""List login history use case."""

from fleetaudit.application.dto.queries import LoginHistoryQuery, Page
from fleetaudit.application.ports import PermissionChecker
from fleetaudit.domain.entities import LoginSession
from fleetaudit.domain.exceptions import PermissionDenied
from fleetaudit.domain.value_objects import PermissionAction, Resource


class ListLoginHistoryUseCase:
    """Page through login sessions by login time, newest first. Requires admin read."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, query: LoginHistoryQuery) -> Page[LoginSession]:
        has_admin = await self._permission_checker.check(
            user_id, Resource.ADMIN, PermissionAction.READ
        )
        if not has_admin:
            raise PermissionDenied("User does not have admin access")

        async with self._uow_factory() as uow:
            items, total = await uow.login_sessions.list(query)
            users = await uow.users.get_many(i.user_id for i in items)
        return Page(items=items, total=total, users=users)
