from datetime import UTC, datetime

import pytest

from photoline.models.asset import AssetType
from photoline.repositories.asset_repository import AssetRepository, MapMarkerOptions, TimeBucketOptions
from photoline.time_buckets import TimeBucketSize
from tests.helpers import make_album, make_asset, make_shared_link, make_stack, make_user


@pytest.fixture
def repo(db_session) -> AssetRepository:
    return AssetRepository(db_session)


@pytest.fixture
def owner(db_session):
    return make_user(db_session, "owner")


def _options(*owners, **overrides) -> TimeBucketOptions:
    values = {"size": TimeBucketSize.MONTH, "owner_ids": tuple(owner.id for owner in owners)}
    values.update(overrides)
    return TimeBucketOptions(**values)


def test_buckets_newest_first_with_counts(db_session, repo, owner):
    """Test month buckets are ordered newest first with per-bucket counts."""
    make_asset(db_session, owner, datetime(2024, 3, 1, 0, 0))
    make_asset(db_session, owner, datetime(2024, 3, 31, 23, 59))
    make_asset(db_session, owner, datetime(2023, 12, 25, 10, 0))
    make_asset(db_session, owner, datetime(2024, 1, 5, 10, 0))

    buckets = repo.get_time_buckets(_options(owner))

    assert [(b.time_bucket, b.count) for b in buckets] == [("2024-03", 2), ("2024-01", 1), ("2023-12", 1)]


def test_bucket_summaries_are_idempotent(db_session, repo, owner):
    """Test repeated summary reads return the same buckets."""
    for day in (2, 9, 16):
        make_asset(db_session, owner, datetime(2024, 5, day, 8, 0))

    assert repo.get_time_buckets(_options(owner)) == repo.get_time_buckets(_options(owner))


def test_day_buckets(db_session, repo, owner):
    """Test day-sized buckets."""
    make_asset(db_session, owner, datetime(2024, 3, 9, 8, 0))
    make_asset(db_session, owner, datetime(2024, 3, 9, 20, 0))
    make_asset(db_session, owner, datetime(2024, 3, 10, 1, 0))

    buckets = repo.get_time_buckets(_options(owner, size=TimeBucketSize.DAY))

    assert [(b.time_bucket, b.count) for b in buckets] == [("2024-03-10", 1), ("2024-03-09", 2)]


def test_bucket_assets_ordered_by_capture_time_then_id(db_session, repo, owner):
    """Test bucket assets are newest first with ties broken by id descending."""
    same_time = datetime(2024, 3, 12, 12, 0)
    early = make_asset(db_session, owner, datetime(2024, 3, 2, 12, 0))
    tie_a = make_asset(db_session, owner, same_time)
    tie_b = make_asset(db_session, owner, same_time)
    make_asset(db_session, owner, datetime(2024, 4, 1, 0, 0))

    assets = repo.get_time_bucket("2024-03", _options(owner))

    ties = sorted([tie_a.id, tie_b.id], reverse=True)
    assert [a.id for a in assets] == [*ties, early.id]


def test_bucket_uses_local_time(db_session, repo, owner):
    """Test bucket membership follows local capture time, not UTC."""
    # Late evening local time on March 31st, already April in UTC
    asset = make_asset(db_session, owner, datetime(2024, 3, 31, 23, 30))
    asset.file_created_at = datetime(2024, 4, 1, 4, 30, tzinfo=UTC)
    db_session.commit()

    assert [a.id for a in repo.get_time_bucket("2024-03", _options(owner))] == [asset.id]
    assert repo.get_time_bucket("2024-04", _options(owner)) == []


def test_other_owners_are_excluded(db_session, repo, owner):
    """Test plain timelines only hold the requested owners' assets."""
    stranger = make_user(db_session, "stranger")
    mine = make_asset(db_session, owner, datetime(2024, 3, 5, 9, 0))
    make_asset(db_session, stranger, datetime(2024, 3, 5, 9, 0))

    assert [a.id for a in repo.get_time_bucket("2024-03", _options(owner))] == [mine.id]


def test_archive_favorite_and_trash_filters(db_session, repo, owner):
    """Test archive, favorite and trash filters, and that hidden assets never show."""
    taken = datetime(2024, 3, 5, 9, 0)
    plain = make_asset(db_session, owner, taken)
    archived = make_asset(db_session, owner, taken, is_archived=True)
    favorite = make_asset(db_session, owner, taken, is_favorite=True)
    trashed = make_asset(db_session, owner, taken, deleted_at=datetime(2024, 4, 1, tzinfo=UTC))
    make_asset(db_session, owner, taken, is_visible=False)

    def ids(**filters):
        return {a.id for a in repo.get_time_bucket("2024-03", _options(owner, **filters))}

    assert ids() == {plain.id, archived.id, favorite.id}
    assert ids(is_archived=False) == {plain.id, favorite.id}
    assert ids(is_archived=True) == {archived.id}
    assert ids(is_favorite=True) == {favorite.id}
    assert ids(is_trashed=True) == {trashed.id}


def test_with_stacked_keeps_only_primary(db_session, repo, owner):
    """Test with_stacked collapses a stack to its primary asset."""
    taken = datetime(2024, 3, 5, 9, 0)
    primary = make_asset(db_session, owner, taken)
    burst = make_asset(db_session, owner, taken)
    single = make_asset(db_session, owner, taken)
    make_stack(db_session, owner, primary, burst)

    stacked = {a.id for a in repo.get_time_bucket("2024-03", _options(owner, with_stacked=True))}
    unstacked = {a.id for a in repo.get_time_bucket("2024-03", _options(owner))}

    assert stacked == {primary.id, single.id}
    assert unstacked == {primary.id, burst.id, single.id}
    assert repo.get_time_buckets(_options(owner, with_stacked=True))[0].count == 2


def test_album_scope_includes_members_assets(db_session, repo, owner):
    """Test album scope includes assets other members contributed."""
    member = make_user(db_session, "member")
    taken = datetime(2024, 3, 5, 9, 0)
    own = make_asset(db_session, owner, taken)
    contributed = make_asset(db_session, member, taken)
    make_asset(db_session, owner, taken)
    album = make_album(db_session, owner, assets=[own, contributed], members=[member])

    assets = repo.get_time_bucket("2024-03", _options(owner, album_id=album.id))

    assert {a.id for a in assets} == {own.id, contributed.id}


def test_shared_link_scope(db_session, repo, owner):
    """Test an asset link limits the scope to its assets."""
    taken = datetime(2024, 3, 5, 9, 0)
    shared = make_asset(db_session, owner, taken)
    make_asset(db_session, owner, taken)
    link = make_shared_link(db_session, owner, assets=[shared])

    assets = repo.get_time_bucket("2024-03", _options(owner, shared_link_id=link.id))

    assert [a.id for a in assets] == [shared.id]


def test_shared_link_scope_ignores_owner_filter(db_session, repo, owner):
    """A link bounds the scope itself, including assets other album members added."""
    member = make_user(db_session, "member")
    taken = datetime(2024, 3, 5, 9, 0)
    contributed = make_asset(db_session, member, taken)
    album = make_album(db_session, owner, assets=[contributed], members=[member])
    link = make_shared_link(db_session, owner, album=album)

    assets = repo.get_time_bucket("2024-03", _options(owner, shared_link_id=link.id))

    assert [a.id for a in assets] == [contributed.id]


def test_bucket_assets_carry_exif_and_stack(db_session, repo, owner):
    """Test bucket assets come with EXIF and stack members loaded."""
    taken = datetime(2024, 3, 5, 9, 0)
    primary = make_asset(db_session, owner, taken, with_exif=True)
    other = make_asset(db_session, owner, taken)
    make_stack(db_session, owner, primary, other)

    by_id = {a.id: a for a in repo.get_time_bucket("2024-03", _options(owner))}

    assert by_id[primary.id].exif_info.make == "Canon"
    assert len(by_id[primary.id].stack.assets) == 2


def test_statistics(db_session, repo, owner):
    """Test statistics group untrashed assets by type."""
    taken = datetime(2024, 3, 5, 9, 0)
    make_asset(db_session, owner, taken)
    make_asset(db_session, owner, taken, is_favorite=True)
    make_asset(db_session, owner, taken, asset_type=AssetType.VIDEO)
    make_asset(db_session, owner, taken, deleted_at=datetime(2024, 4, 1, tzinfo=UTC))

    assert repo.get_statistics(owner.id) == {AssetType.IMAGE: 2, AssetType.VIDEO: 1}
    assert repo.get_statistics(owner.id, is_favorite=True) == {AssetType.IMAGE: 1}
    assert repo.get_statistics(owner.id, is_trashed=True) == {AssetType.IMAGE: 1}


def test_get_by_id(db_session, repo, owner):
    """Test fetching a single asset."""
    asset = make_asset(db_session, owner, datetime(2024, 3, 5, 9, 0))
    assert repo.get_by_id(asset.id).id == asset.id


LISBON = {"latitude": 38.72, "longitude": -9.14, "city": "Lisbon", "country": "Portugal"}


def test_map_markers_need_coordinates(db_session, repo, owner):
    """Only assets with both latitude and longitude become markers, newest first."""
    older = make_asset(db_session, owner, datetime(2023, 6, 1, 9, 0), exif=LISBON)
    newer = make_asset(db_session, owner, datetime(2024, 6, 1, 9, 0), exif=LISBON)
    make_asset(db_session, owner, datetime(2024, 6, 2, 9, 0), with_exif=True)
    make_asset(db_session, owner, datetime(2024, 6, 3, 9, 0))

    markers = repo.get_map_markers(MapMarkerOptions(viewer_id=owner.id, owner_ids=(owner.id,)))

    assert [m.id for m in markers] == [newer.id, older.id]
    assert markers[0].city == "Lisbon"
    assert markers[0].latitude == pytest.approx(38.72)


def test_map_markers_keep_archive_and_favorites_private(db_session, repo, owner):
    """Another owner's archived assets never show, and favorite filters only match the viewer's own."""
    partner = make_user(db_session, "partner")
    taken = datetime(2024, 6, 1, 9, 0)
    own_archived = make_asset(db_session, owner, taken, exif=LISBON, is_archived=True)
    own_favorite = make_asset(db_session, owner, taken, exif=LISBON, is_favorite=True)
    partner_plain = make_asset(db_session, partner, taken, exif=LISBON)
    make_asset(db_session, partner, taken, exif=LISBON, is_archived=True)
    make_asset(db_session, partner, taken, exif=LISBON, is_favorite=True)

    def ids(**filters):
        options = MapMarkerOptions(viewer_id=owner.id, owner_ids=(owner.id, partner.id), **filters)
        return {m.id for m in repo.get_map_markers(options)}

    assert own_archived.id in ids()
    assert partner_plain.id in ids()
    assert len(ids()) == 4
    assert ids(is_favorite=True) == {own_favorite.id}
    assert ids(is_archived=True) == {own_archived.id}


def test_map_markers_with_shared_albums(db_session, repo, owner):
    """Albums the viewer belongs to contribute their geotagged assets."""
    album_owner = make_user(db_session, "album_owner")
    taken = datetime(2024, 6, 1, 9, 0)
    in_album = make_asset(db_session, album_owner, taken, exif=LISBON)
    make_asset(db_session, album_owner, taken, exif=LISBON)
    make_album(db_session, album_owner, assets=[in_album], members=[owner])

    without = repo.get_map_markers(MapMarkerOptions(viewer_id=owner.id, owner_ids=(owner.id,)))
    with_albums = repo.get_map_markers(MapMarkerOptions(viewer_id=owner.id, owner_ids=(owner.id,), with_shared_albums=True))

    assert without == []
    assert [m.id for m in with_albums] == [in_album.id]


def test_map_markers_creation_window(db_session, repo, owner):
    """Test the file creation window bounds map markers."""
    early = make_asset(db_session, owner, datetime(2024, 1, 1, 9, 0), exif=LISBON)
    make_asset(db_session, owner, datetime(2024, 6, 1, 9, 0), exif=LISBON)

    options = MapMarkerOptions(viewer_id=owner.id, owner_ids=(owner.id,), file_created_before=datetime(2024, 3, 1, tzinfo=UTC))

    assert [m.id for m in repo.get_map_markers(options)] == [early.id]


def test_on_this_day(db_session, repo, owner):
    """Same month and day in earlier years only, skipping archived and trashed assets."""
    two_years = make_asset(db_session, owner, datetime(2022, 7, 4, 9, 0))
    last_year = make_asset(db_session, owner, datetime(2023, 7, 4, 18, 0))
    make_asset(db_session, owner, datetime(2024, 7, 4, 9, 0))
    make_asset(db_session, owner, datetime(2023, 7, 5, 9, 0))
    make_asset(db_session, owner, datetime(2021, 7, 4, 9, 0), is_archived=True)
    make_asset(db_session, owner, datetime(2020, 7, 4, 9, 0), deleted_at=datetime(2024, 1, 1, tzinfo=UTC))

    assets = repo.get_on_this_day((owner.id,), 7, 4, before_year=2024)

    assert [a.id for a in assets] == [last_year.id, two_years.id]


def test_random_is_bounded_and_browsable(db_session, repo, owner):
    """Test random picks respect the count and skip archived, trashed and foreign assets."""
    taken = datetime(2024, 6, 1, 9, 0)
    plain = {make_asset(db_session, owner, taken).id for _ in range(3)}
    make_asset(db_session, owner, taken, is_archived=True)
    make_asset(db_session, owner, taken, deleted_at=datetime(2024, 7, 1, tzinfo=UTC))
    make_asset(db_session, make_user(db_session, "stranger"), taken)

    assert len(repo.get_random((owner.id,), 2)) == 2
    assert {a.id for a in repo.get_random((owner.id,), 10)} == plain
