"""Profile and role repositories for database operations."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from tooldash.api.dependencies import DBSession
from tooldash.modules.users.models import UserProfile, UserRole


class ProfileRepository:
    """Repository for UserProfile database operations.

    The role relationship is loaded with a join, so every read here is
    a single round trip.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, profile: UserProfile) -> UserProfile:
        """Create a new profile.

        Args:
            profile: UserProfile instance to create

        Returns:
            The created profile with ID and role populated
        """
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def get_by_principal_id(self, principal_id: UUID) -> UserProfile | None:
        """Get the profile attached to an identity-provider principal.

        Args:
            principal_id: The token subject

        Returns:
            UserProfile if found, None otherwise
        """
        stmt = select(UserProfile).where(UserProfile.user_id == principal_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, profile_id: UUID) -> UserProfile | None:
        """Get a profile by its own ID.

        Args:
            profile_id: The profile's UUID

        Returns:
            UserProfile if found, None otherwise
        """
        stmt = select(UserProfile).where(UserProfile.id == profile_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_permissions(
        self,
        profile: UserProfile,
        permissions: dict[str, Any] | None,
    ) -> UserProfile:
        """Replace a profile's custom permission matrix.

        Args:
            profile: The profile to update
            permissions: New matrix, or None to clear the override

        Returns:
            The updated profile
        """
        profile.permissions = permissions
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def assign_role(self, profile: UserProfile, role: UserRole) -> UserProfile:
        """Point a profile at a different role.

        Args:
            profile: The profile to update
            role: The role to assign

        Returns:
            The updated profile
        """
        profile.role_id = role.id
        profile.role = role
        await self.session.flush()
        await self.session.refresh(profile)
        return profile


class RoleRepository:
    """Repository for UserRole database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, role: UserRole) -> UserRole:
        """Create a new role.

        Args:
            role: UserRole instance to create

        Returns:
            The created role
        """
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_by_id(self, role_id: UUID) -> UserRole | None:
        """Get a role by ID.

        Args:
            role_id: The role's UUID

        Returns:
            UserRole if found, None otherwise
        """
        stmt = select(UserRole).where(UserRole.id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_user_counts(self) -> list[tuple[UserRole, int]]:
        """List all roles with the number of profiles assigned to each.

        Returns:
            (role, user_count) pairs ordered by role name
        """
        stmt = (
            select(UserRole, func.count(UserProfile.id))
            .outerjoin(UserProfile, UserProfile.role_id == UserRole.id)
            .group_by(UserRole.id)
            .order_by(UserRole.name)
        )
        result = await self.session.execute(stmt)
        return [(role, count) for role, count in result.all()]


# Type aliases for dependency injection
ProfileRepo = Annotated[ProfileRepository, Depends(ProfileRepository)]
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
