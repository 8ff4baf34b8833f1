import asyncpg
import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from database.connection import DatabasePool, _init_connection
from database.converters import (
    course_from_rows,
    hole_score_to_row,
    parse_id,
    parse_ids,
    round_from_rows,
    round_to_row,
    tee_ratings_to_rows,
    user_from_row,
)
from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError, IntegrityError, NotFoundError
from database.repositories.course_repo import CourseRepositoryDB
from database.repositories.round_repo import RoundRepositoryDB
from database.repositories.user_repo import UserRepositoryDB
from models import Course, HoleScore, Round, User


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def mock_pool():
    pool = MagicMock()
    conn = AsyncMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    conn.transaction = MagicMock()
    conn.transaction.return_value.__aenter__.return_value = AsyncMock()
    return pool, conn


def _round_row(round_id=None, *, user_id=None, players=None, differential=12.5, holes=18):
    """Helper: minimal users.rounds row dict."""
    return {
        "id": round_id or uuid4(),
        "user_id": user_id or uuid4(),
        "course_id": uuid4(),
        "course_name": "Test Links",
        "tee_color": "white",
        "number_of_holes": holes,
        "round_date": date(2025, 4, 12),
        "players": players or [],
        "total_score": 85,
        "total_par": 72,
        "score_differential": differential,
        "notes": None,
        "created_at": datetime(2025, 4, 12, 18, 0),
        "updated_at": datetime(2025, 4, 12, 18, 0),
    }


def _hole_score_row(*, hole_number=1, strokes=5, par=4):
    return {
        "hole_number": hole_number,
        "par": par,
        "strokes": strokes,
        "putts": 2,
        "fairway_hit": True,
        "green_in_regulation": False,
    }


def _user_row(user_id=None, handicap="18.4"):
    return {
        "id": user_id or uuid4(),
        "first_name": "Sam",
        "last_name": "Snead",
        "email": "sam@example.com",
        "handicap_index": Decimal(handicap),
        "last_handicap_update": None,
        "created_at": datetime(2025, 1, 1),
    }


# ================================================================
# converters.py - pure function tests (no mocks needed)
# ================================================================

def test_round_converter_maps_fields():
    rid, uid, other = uuid4(), uuid4(), uuid4()
    row = _round_row(rid, user_id=uid, players=[other])
    score_rows = [
        _hole_score_row(hole_number=i, strokes=5) for i in range(18, 0, -1)
    ]
    r = round_from_rows(row, score_rows)

    assert r.id == str(rid)
    assert r.user_id == str(uid)
    assert r.players == [str(other)]
    assert r.score_differential == 12.5
    assert [hs.hole_number for hs in r.hole_scores] == list(range(1, 19))


def test_round_converter_null_differential():
    r = round_from_rows(_round_row(differential=None), [])
    assert r.score_differential is None


def test_round_to_row_roundtrips_ids():
    uid, other = uuid4(), uuid4()
    r = Round(
        user_id=str(uid), course_id=None, players=[str(other)],
        date=date(2025, 4, 12), total_score=85, score_differential=11.2,
    )
    data = round_to_row(r)

    assert data["user_id"] == uid
    assert data["course_id"] is None
    assert data["players"] == [other]
    assert data["score_differential"] == 11.2


def test_hole_score_to_row():
    hs = HoleScore(hole_number=3, par=4, strokes=5, putts=2)
    rid = uuid4()
    row = hole_score_to_row(hs, rid)

    assert row == (rid, 3, 4, 5, 2, None, None)


def test_course_converter_builds_tee_ratings():
    cid = uuid4()
    course_row = {"id": cid, "name": "Test", "location": "Loc", "par": 72}
    rating_rows = [
        {"tee_color": "white", "course_rating": 70.1, "slope_rating": 125},
        {"tee_color": "red", "course_rating": 67.5, "slope_rating": 118},
    ]
    c = course_from_rows(course_row, [], rating_rows)

    assert c.id == str(cid)
    assert c.ratings_for("white") == (70.1, 125.0)
    assert c.ratings_for("RED") == (67.5, 118.0)


def test_tee_ratings_to_rows_sorted_by_color():
    course = Course(
        course_rating={"white": 70.0, "blue": 72.0},
        slope_rating={"white": 120, "blue": 130},
    )
    cid = uuid4()
    assert tee_ratings_to_rows(course, cid) == [
        (cid, "blue", 72.0, 130),
        (cid, "white", 70.0, 120),
    ]


def test_user_converter_decimal_handicap():
    u = user_from_row(_user_row(handicap="18.4"))
    assert u.handicap_index == 18.4
    assert u.full_name == "Sam Snead"


# ================================================================
# CourseRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_course_repo_get_course(mock_pool):
    pool, conn = mock_pool
    repo = CourseRepositoryDB(pool)

    course_id = uuid4()
    conn.fetchrow.return_value = {"id": course_id, "name": "Test", "location": "Loc", "par": 72}
    conn.fetch.side_effect = [
        [],  # holes
        [{"tee_color": "white", "course_rating": 70.0, "slope_rating": 120}],
    ]

    c = await repo.get_course(str(course_id))
    assert c is not None
    assert c.name == "Test"
    assert c.tee_colors == ["white"]


@pytest.mark.asyncio
async def test_course_repo_get_course_not_found(mock_pool):
    pool, conn = mock_pool
    repo = CourseRepositoryDB(pool)
    conn.fetchrow.return_value = None

    assert await repo.get_course(str(uuid4())) is None


@pytest.mark.asyncio
async def test_course_repo_create_course_duplicate(mock_pool):
    pool, conn = mock_pool
    repo = CourseRepositoryDB(pool)
    conn.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key")

    with pytest.raises(DuplicateError):
        await repo.create_course(Course(name="Dup"))


# ================================================================
# UserRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_user_repo_update_handicap(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    conn.execute.return_value = "UPDATE 1"

    user_id = str(uuid4())
    await repo.update_handicap(user_id, 14.2)

    args = conn.execute.call_args.args
    assert "last_handicap_update = NOW()" in args[0]
    assert args[2] == 14.2


@pytest.mark.asyncio
async def test_user_repo_update_handicap_missing_user(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    conn.execute.return_value = "UPDATE 0"

    with pytest.raises(NotFoundError):
        await repo.update_handicap(str(uuid4()), 14.2)


@pytest.mark.asyncio
async def test_user_repo_missing_user_ids(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    known, unknown = uuid4(), uuid4()
    conn.fetch.return_value = [{"id": known}]

    missing = await repo.missing_user_ids([str(known), str(unknown), str(known)])
    assert missing == [str(unknown)]


@pytest.mark.asyncio
async def test_user_repo_create_duplicate_email(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    conn.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key")

    with pytest.raises(DuplicateError):
        await repo.create_user(User(email="sam@example.com"))


@pytest.mark.asyncio
async def test_user_repo_get_users_keeps_request_order(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    first, second, unknown = uuid4(), uuid4(), uuid4()
    conn.fetch.return_value = [_user_row(first), _user_row(second)]

    users = await repo.get_users([str(second), str(unknown), str(first), "not-an-id"])

    assert [u.id for u in users] == [str(second), str(first)]
    assert conn.fetch.call_args.args[1] == [second, unknown, first]


@pytest.mark.asyncio
async def test_user_repo_update_user_profile(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    user_id = uuid4()
    conn.fetchrow.return_value = _user_row(user_id)

    user = await repo.update_user(
        str(user_id), first_name="Sam", last_name="Snead", handicap_index=0.0
    )

    sql, *params = conn.fetchrow.call_args.args
    assert "first_name = $2, last_name = $3" in sql
    assert "handicap_index" not in sql
    assert params == [user_id, "Sam", "Snead"]
    assert user.id == str(user_id)


@pytest.mark.asyncio
async def test_user_repo_update_user_missing(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    conn.fetchrow.return_value = None

    assert await repo.update_user(str(uuid4()), first_name="Nobody") is None


@pytest.mark.asyncio
async def test_user_repo_update_user_duplicate_email(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    conn.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key")

    with pytest.raises(DuplicateError):
        await repo.update_user(str(uuid4()), email="taken@example.com")


@pytest.mark.asyncio
async def test_user_repo_malformed_ids_match_nothing(mock_pool):
    pool, conn = mock_pool
    repo = UserRepositoryDB(pool)
    known = uuid4()
    conn.fetch.return_value = [{"id": known}]

    assert await repo.get_user("abc") is None
    assert await repo.delete_user("abc") is False
    assert await repo.missing_user_ids([str(known), "abc"]) == ["abc"]
    with pytest.raises(NotFoundError):
        await repo.update_handicap("abc", 10.0)
    conn.fetchrow.assert_not_awaited()
    conn.execute.assert_not_awaited()


# ================================================================
# RoundRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_round_repo_get_round(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)

    round_id = uuid4()
    conn.fetchrow.return_value = _round_row(round_id)
    conn.fetch.return_value = []

    r = await repo.get_round(str(round_id))
    assert r is not None
    assert r.id == str(round_id)


@pytest.mark.asyncio
async def test_round_repo_get_round_not_found(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.fetchrow.return_value = None

    assert await repo.get_round(str(uuid4())) is None


@pytest.mark.asyncio
async def test_round_repo_recent_differentials_newest_first(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.fetch.return_value = [{"score_differential": 9.5}, {"score_differential": 14.0}]

    diffs = await repo.get_recent_differentials(str(uuid4()), limit=20)

    assert diffs == [9.5, 14.0]
    sql, _user, limit = conn.fetch.call_args.args
    assert "ORDER BY round_date DESC, created_at DESC" in sql
    assert limit == 20


@pytest.mark.asyncio
async def test_round_repo_chronological_order(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.fetch.return_value = [_round_row(), _round_row()]

    rounds = await repo.get_rounds_chronological(str(uuid4()))

    assert len(rounds) == 2
    assert "ORDER BY round_date ASC, created_at ASC" in conn.fetch.call_args.args[0]


@pytest.mark.asyncio
async def test_round_repo_create_round_inserts_hole_scores(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)

    row = _round_row(holes=9)
    conn.fetchrow.return_value = row
    conn.fetch.return_value = [_hole_score_row(hole_number=i) for i in range(1, 10)]

    r = Round(
        user_id=str(row["user_id"]),
        number_of_holes=9,
        date=date(2025, 4, 12),
        hole_scores=[HoleScore(hole_number=i, par=4, strokes=5) for i in range(1, 10)],
        total_score=45,
        score_differential=12.5,
    )
    saved = await repo.create_round(r)

    assert saved.score_differential == 12.5
    assert len(saved.hole_scores) == 9
    conn.executemany.assert_awaited_once()
    assert len(conn.executemany.call_args.args[1]) == 9


@pytest.mark.asyncio
async def test_round_repo_create_round_unknown_user(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.fetchrow.side_effect = asyncpg.ForeignKeyViolationError("fk")

    with pytest.raises(IntegrityError):
        await repo.create_round(Round(user_id=str(uuid4()), date=date(2025, 4, 12)))


@pytest.mark.asyncio
async def test_round_repo_update_round_not_found(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.fetchrow.return_value = None

    with pytest.raises(NotFoundError):
        await repo.update_round(str(uuid4()), notes="windy")


@pytest.mark.asyncio
async def test_round_repo_update_never_touches_differential(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.fetchrow.return_value = _round_row()
    conn.fetch.return_value = []

    await repo.update_round(
        str(uuid4()),
        hole_scores=[HoleScore(hole_number=1, par=4, strokes=3)],
    )

    update_sql = conn.fetchrow.call_args.args[0]
    assert "score_differential" not in update_sql
    conn.executemany.assert_awaited_once()


@pytest.mark.asyncio
async def test_round_repo_delete_rounds(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)
    conn.execute.return_value = "DELETE 3"

    a, b, c = (str(uuid4()) for _ in range(3))
    assert await repo.delete_rounds([a, b, c, a]) == 3
    assert len(conn.execute.call_args.args[1]) == 3


@pytest.mark.asyncio
async def test_round_repo_delete_nothing(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)

    assert await repo.delete_rounds([]) == 0
    conn.execute.assert_not_awaited()


# ================================================================
# DatabaseManager
# ================================================================

@pytest.mark.asyncio
async def test_database_manager_initialize_schema(mock_pool):
    pool, conn = mock_pool
    manager = DatabaseManager(pool)

    await manager.initialize_schema()

    sql = conn.execute.call_args.args[0]
    assert "CREATE TABLE IF NOT EXISTS users.rounds" in sql
    assert isinstance(manager.rounds, RoundRepositoryDB)


# ================================================================
# Connection pool
# ================================================================

@pytest.mark.asyncio
async def test_numeric_columns_decode_as_float():
    conn = AsyncMock()

    await _init_connection(conn)

    args, kwargs = conn.set_type_codec.call_args
    assert args == ("numeric",)
    assert kwargs["decoder"] is float


def test_pool_requires_initialize():
    with pytest.raises(RuntimeError, match="not initialized"):
        DatabasePool().pool


@pytest.mark.asyncio
async def test_health_check_false_without_pool():
    assert await DatabasePool().health_check() is False


# ================================================================
# Malformed ids
# ================================================================

def test_parse_ids_drops_malformed_and_duplicates():
    a, b = uuid4(), uuid4()
    assert parse_ids([str(a), "abc", str(b), str(a), None]) == [a, b]
    assert parse_id("abc") is None


@pytest.mark.asyncio
async def test_round_and_course_reads_with_malformed_ids(mock_pool):
    pool, conn = mock_pool
    rounds = RoundRepositoryDB(pool)

    assert await rounds.get_round("abc") is None
    assert await rounds.get_recent_differentials("abc") == []
    assert await rounds.get_rounds_chronological("abc") == []
    assert await CourseRepositoryDB(pool).get_course("abc") is None
    with pytest.raises(NotFoundError):
        await rounds.update_round("abc", notes="x")
    conn.fetch.assert_not_awaited()
    conn.fetchrow.assert_not_awaited()
