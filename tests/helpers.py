import itertools
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

import jwt
from sqlalchemy.orm import Session

from photoline.models import Album, Asset, AssetType, Exif, Partner, SharedLink, SharedLinkType, Stack, User

JWT_SECRET_KEY = "testsecretkey"

_file_numbers = itertools.count(1)


def make_user(db: Session, name: str = "user", *, deleted: bool = False) -> User:
    user = User(email=f"{name}-{uuid.uuid4().hex[:8]}@example.com", name=name)
    if deleted:
        user.deleted_at = datetime.now(UTC)
    db.add(user)
    db.commit()
    return user


def make_asset(
    db: Session,
    owner: User,
    taken_at: datetime,
    *,
    asset_type: AssetType = AssetType.IMAGE,
    with_exif: bool = False,
    exif: dict | None = None,
    **fields,
) -> Asset:
    """Create an asset captured at ``taken_at`` (naive, read as both UTC and local time)."""
    asset = Asset(
        owner_id=owner.id,
        type=asset_type,
        original_file_name=f"IMG_{next(_file_numbers):04d}.jpg",
        original_mime_type="image/jpeg" if asset_type == AssetType.IMAGE else "video/mp4",
        file_created_at=taken_at.replace(tzinfo=UTC),
        local_date_time=taken_at,
        thumbhash="1QcSHQRnh493V4dIh4eXh1h4kJUI",
        **fields,
    )
    db.add(asset)
    db.flush()
    if with_exif or exif:
        values = {"make": "Canon", "model": "EOS R5", "lens_model": "RF 24-70mm", "city": "Lisbon", "iso": 200, "f_number": 2.8}
        values.update(exif or {})
        db.add(Exif(asset_id=asset.id, **values))
    db.commit()
    return asset


def make_partner(db: Session, owner: User, recipient: User, *, in_timeline: bool = True) -> Partner:
    partner = Partner(shared_by_id=owner.id, shared_with_id=recipient.id, in_timeline=in_timeline)
    db.add(partner)
    db.commit()
    return partner


def make_album(db: Session, owner: User, assets: Iterable[Asset] = (), members: Iterable[User] = ()) -> Album:
    album = Album(owner_id=owner.id, name="Trip")
    album.assets.extend(assets)
    album.members.extend(members)
    db.add(album)
    db.commit()
    return album


def make_shared_link(
    db: Session,
    owner: User,
    *,
    album: Album | None = None,
    assets: Iterable[Asset] = (),
    show_exif: bool = True,
    expires_at: datetime | None = None,
) -> SharedLink:
    link = SharedLink(
        key=uuid.uuid4().hex,
        user_id=owner.id,
        type=SharedLinkType.ALBUM if album else SharedLinkType.INDIVIDUAL,
        album_id=album.id if album else None,
        show_exif=show_exif,
        expires_at=expires_at,
    )
    link.assets.extend(assets)
    db.add(link)
    db.commit()
    return link


def make_stack(db: Session, owner: User, primary: Asset, *others: Asset) -> Stack:
    stack = Stack(owner_id=owner.id, primary_asset_id=primary.id)
    db.add(stack)
    db.flush()
    for asset in (primary, *others):
        asset.stack_id = stack.id
    db.commit()
    return stack


def token_for(user: User, *, expires_in: timedelta = timedelta(hours=1)) -> str:
    payload = {"sub": str(user.id), "exp": datetime.now(UTC) + expires_in}
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm="HS256")


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(user)}"}
