"""
Unit tests for the school registry service.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from campus_revival.modules.schools.schemas import SchoolCreate
from campus_revival.modules.schools.service import (
    DuplicateSchoolError,
    SchoolNotFoundError,
    create_school,
    get_school,
    to_school_response,
)


class TestToSchoolResponse:
    """Tests for the school response builder."""

    def test_unadopted_school_has_no_adopter(self, sample_school):
        response = to_school_response(sample_school)
        assert response.adopted is False
        assert response.adopter is None
        assert response.adopter_id is None

    def test_adopted_school_includes_adopter_summary(self, sample_school, sample_user):
        sample_school.adopted = True
        sample_school.adopter_id = sample_user.id
        sample_school.adopter = sample_user

        response = to_school_response(sample_school)

        assert response.adopter_id == sample_user.id
        assert response.adopter.name == "Ann"
        assert response.adopter.email == "ann@x.com"

    def test_serializes_camel_case(self, sample_school):
        data = to_school_response(sample_school).model_dump(by_alias=True)
        assert "adopterId" in data
        assert "createdAt" in data


class TestGetSchool:
    """Tests for get_school function."""

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, mock_db):
        with patch("campus_revival.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock()

            with pytest.raises(SchoolNotFoundError) as exc_info:
                await get_school(mock_db, "not-a-uuid")

            assert exc_info.value.status_code == 404
            mock_repo.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, mock_db):
        with patch("campus_revival.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(SchoolNotFoundError):
                await get_school(mock_db, str(uuid4()))

    @pytest.mark.asyncio
    async def test_found(self, mock_db, sample_school):
        with patch("campus_revival.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=sample_school)

            result = await get_school(mock_db, sample_school.id.upper())

            assert result.id == sample_school.id
            mock_repo.get_by_id.assert_awaited_once_with(mock_db, sample_school.id)


class TestCreateSchool:
    """Tests for create_school function."""

    @pytest.fixture
    def school_data(self):
        return SchoolCreate(name="  Lincoln High ", lat=40.7, lng=-74.0, address=" 1 Main St ")

    @pytest.mark.asyncio
    async def test_create_success(self, mock_db, school_data, sample_school):
        with patch("campus_revival.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(return_value=sample_school)

            result = await create_school(mock_db, school_data, created_by="admin-1")

            assert result.name == "Lincoln High"
            kwargs = mock_repo.create.call_args.kwargs
            assert kwargs["name"] == "Lincoln High"
            assert kwargs["address"] == "1 Main St"
            assert kwargs["description"] is None

    @pytest.mark.asyncio
    async def test_create_duplicate_name(self, mock_db, school_data, sample_school):
        with patch("campus_revival.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=sample_school)
            mock_repo.create = AsyncMock()

            with pytest.raises(DuplicateSchoolError) as exc_info:
                await create_school(mock_db, school_data, created_by="admin-1")

            assert exc_info.value.status_code == 400
            mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_duplicate_caught_from_index(self, mock_db, school_data):
        with patch("campus_revival.modules.schools.service.SchoolRepository") as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(side_effect=IntegrityError("insert", {}, Exception()))

            with pytest.raises(DuplicateSchoolError):
                await create_school(mock_db, school_data, created_by="admin-1")

            mock_db.rollback.assert_awaited_once()
