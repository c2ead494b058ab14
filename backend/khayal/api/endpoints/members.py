from typing import List, Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.orm import Session

from khayal.auth import get_current_admin
from khayal.database import get_db
from khayal.exceptions import NotFound, ValidationError
from khayal.models.member import DEFAULT_MEMBER_ORDER, Member
from khayal.schemas.auth import Admin
from khayal.schemas.member import MemberInDB
from khayal.utils.audit_logger import create_audit_log
from khayal.utils.forms import parse_form_bool, parse_form_int, require_fields
from khayal.utils.uploads import delete_image, save_image

router = APIRouter()
admin_router = APIRouter()

def _ordered(query):
    return query.order_by(Member.order.asc(), Member.created_at.asc(), Member.id.asc())

def _get_member_or_404(db: Session, member_id: int) -> Member:
    db_member = db.query(Member).filter(Member.id == member_id).first()
    if db_member is None:
        raise NotFound("Member not found")
    return db_member

@router.get("", response_model=List[MemberInDB])
async def read_active_members(db: Session = Depends(get_db)):
    """Public roster: active members in display order."""
    return _ordered(db.query(Member).filter(Member.active == True)).all()  # noqa: E712

@admin_router.get("", response_model=List[MemberInDB])
async def read_members(
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """All members, including inactive ones."""
    return _ordered(db.query(Member)).all()

@admin_router.get("/{member_id}", response_model=MemberInDB)
async def read_member(
    member_id: int,
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    return _get_member_or_404(db, member_id)

@admin_router.post("", response_model=MemberInDB, status_code=status.HTTP_201_CREATED)
async def create_member(
    request: Request,
    name: Optional[str] = Form(None),
    instrument: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    is_captain: Optional[str] = Form(None, alias="isCaptain"),
    order: Optional[str] = Form(None),
    active: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """Create a member. An image upload is required."""
    require_fields(name=name, instrument=instrument, bio=bio)
    captain = parse_form_bool(is_captain, False, "isCaptain")
    is_active = parse_form_bool(active, True, "active")
    display_order = parse_form_int(order, DEFAULT_MEMBER_ORDER, "order")

    image_path = await save_image(image)
    if image_path is None:
        raise ValidationError("Image is required")

    db_member = Member(
        name=name,
        instrument=instrument,
        bio=bio,
        image=image_path,
        is_captain=captain,
        order=display_order,
        active=is_active
    )
    db.add(db_member)
    db.commit()
    db.refresh(db_member)

    create_audit_log(
        db, request,
        action="member_created",
        entity_type="member",
        entity_id=db_member.id,
        user=current_admin.username,
        details={"name": db_member.name}
    )
    return db_member

@admin_router.put("/{member_id}", response_model=MemberInDB)
async def update_member(
    request: Request,
    member_id: int,
    name: Optional[str] = Form(None),
    instrument: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    is_captain: Optional[str] = Form(None, alias="isCaptain"),
    order: Optional[str] = Form(None),
    active: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """
    Replace a member's fields. The image is only replaced when a new file is
    uploaded; a missing order keeps the current one, missing flags mean false.
    """
    db_member = _get_member_or_404(db, member_id)
    require_fields(name=name, instrument=instrument, bio=bio)
    captain = parse_form_bool(is_captain, False, "isCaptain")
    is_active = parse_form_bool(active, False, "active")
    display_order = parse_form_int(order, db_member.order, "order")

    new_image = await save_image(image)
    old_image = db_member.image

    db_member.name = name
    db_member.instrument = instrument
    db_member.bio = bio
    db_member.is_captain = captain
    db_member.order = display_order
    db_member.active = is_active
    if new_image:
        db_member.image = new_image

    db.commit()
    db.refresh(db_member)

    if new_image and old_image != new_image:
        delete_image(old_image)

    create_audit_log(
        db, request,
        action="member_updated",
        entity_type="member",
        entity_id=db_member.id,
        user=current_admin.username,
        details={"name": db_member.name, "image_replaced": bool(new_image)}
    )
    return db_member

@admin_router.delete("/{member_id}")
async def delete_member(
    request: Request,
    member_id: int,
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """Delete a member and its stored image."""
    db_member = _get_member_or_404(db, member_id)
    image_path = db_member.image
    name = db_member.name

    db.delete(db_member)
    db.commit()
    delete_image(image_path)

    create_audit_log(
        db, request,
        action="member_deleted",
        entity_type="member",
        entity_id=member_id,
        user=current_admin.username,
        details={"name": name}
    )
    return {"message": "Member deleted"}
