"""Auth facade over the remote service.

Every operation returns an ``OperationResult`` instead of raising. Multi-step
operations run their remote calls in order and stop at the first failure.
There is no rollback: the result's ``steps`` show exactly which calls were
applied before the failure.
"""

import logging
from typing import Any, Awaitable, Callable, Sequence
from uuid import UUID

from core.exceptions import AppException
from domain.entities.operation import OperationResult, StepOutcome, StepStatus
from domain.entities.profile import Profile
from domain.entities.session import Session, SignUpResult
from domain.repositories.remote_service import IRemoteDataService

logger = logging.getLogger(__name__)

Step = tuple[str, Callable[[], Awaitable[Any]]]

PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"
PROFILE_LOAD_MESSAGE = "Failed to load profile"


class AuthService:
    """Sign-up, sign-in and account management."""

    def __init__(self, remote: IRemoteDataService) -> None:
        self._remote = remote

    async def sign_up(
        self, email: str, password: str, name: str
    ) -> OperationResult[SignUpResult]:
        """Create an auth identity, then its profile row.

        A failed profile insert leaves the identity in place.
        """
        created: list[SignUpResult] = []

        async def create_identity() -> None:
            created.append(await self._remote.auth.sign_up(email, password))

        async def create_profile() -> None:
            identity = created[0]
            if identity.user is None:
                return
            await self._remote.profiles.create(
                Profile(id=identity.user.id, name=name, email=email)
            )

        result: OperationResult[SignUpResult] = await self._run_steps(
            "sign_up",
            [("create_identity", create_identity), ("create_profile", create_profile)],
        )
        if created:
            result.data = created[0]
        return result

    async def sign_in(self, email: str, password: str) -> OperationResult[Session]:
        sessions: list[Session] = []

        async def authenticate() -> None:
            sessions.append(await self._remote.auth.sign_in_with_password(email, password))

        result: OperationResult[Session] = await self._run_steps(
            "sign_in", [("authenticate", authenticate)]
        )
        if sessions:
            result.data = sessions[0]
        return result

    async def sign_out(self) -> OperationResult[None]:
        return await self._run_steps("sign_out", [("sign_out", self._remote.auth.sign_out)])

    async def update_profile(
        self,
        user_id: UUID,
        name: str | None = None,
        email: str | None = None,
    ) -> OperationResult[None]:
        """Update the profile row, then the auth e-mail if one was given.

        The two writes are not transactional; a failed e-mail update leaves
        the profile row already changed.
        """
        if name is None and email is None:
            return OperationResult()

        async def update_profile_row() -> None:
            await self._remote.profiles.update(user_id, name=name, email=email)

        async def update_auth_email() -> None:
            await self._remote.auth.update_user(email=email)

        steps: list[Step] = [("update_profile_row", update_profile_row)]
        if email:
            steps.append(("update_auth_email", update_auth_email))
        return await self._run_steps("update_profile", steps)

    async def update_password(
        self, new_password: str, confirm_password: str | None = None
    ) -> OperationResult[None]:
        """Change the signed-in user's password."""
        if confirm_password is not None and new_password != confirm_password:
            return OperationResult(error=PASSWORD_MISMATCH_MESSAGE)

        async def update_password() -> None:
            await self._remote.auth.update_user(password=new_password)

        return await self._run_steps("update_password", [("update_password", update_password)])

    async def delete_account(self, user_id: UUID) -> OperationResult[int]:
        """Delete the user's projects, then the profile row.

        The auth identity itself is left alone; removing it needs a
        privileged key this service never holds. If the projects delete
        fails the profile delete is not attempted.
        """
        deleted: list[int] = []

        async def delete_projects() -> None:
            deleted.append(await self._remote.projects.delete_for_user(user_id))

        async def delete_profile() -> None:
            await self._remote.profiles.delete(user_id)

        result: OperationResult[int] = await self._run_steps(
            "delete_account",
            [("delete_projects", delete_projects), ("delete_profile", delete_profile)],
        )
        if result.ok:
            result.data = deleted[0]
        return result

    async def get_profile(self, user_id: UUID) -> OperationResult[Profile]:
        try:
            profile = await self._remote.profiles.get(user_id)
        except AppException as exc:
            logger.warning("Loading profile %s failed: %s", user_id, exc.message)
            return OperationResult(error=PROFILE_LOAD_MESSAGE)
        if profile is None:
            return OperationResult(error=PROFILE_LOAD_MESSAGE)
        return OperationResult(data=profile)

    async def _run_steps(self, operation: str, steps: Sequence[Step]) -> OperationResult[Any]:
        outcomes: list[StepOutcome] = []
        for index, (name, call) in enumerate(steps):
            try:
                await call()
            except AppException as exc:
                logger.warning("%s failed at step %s: %s", operation, name, exc.message)
                outcomes.append(StepOutcome(name, StepStatus.FAILED, exc.message))
                outcomes.extend(
                    StepOutcome(skipped, StepStatus.SKIPPED) for skipped, _ in steps[index + 1 :]
                )
                return OperationResult(error=exc.message, steps=outcomes)
            outcomes.append(StepOutcome(name, StepStatus.SUCCEEDED))
        return OperationResult(steps=outcomes)
