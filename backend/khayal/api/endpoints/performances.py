from typing import List, Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.orm import Session

from khayal.auth import get_current_admin
from khayal.database import get_db
from khayal.exceptions import NotFound, ValidationError
from khayal.models.performance import Performance
from khayal.schemas.auth import Admin
from khayal.schemas.performance import PerformanceInDB, PerformanceListing
from khayal.services.performance_schedule import parse_performance_date, partition_performances
from khayal.utils.audit_logger import create_audit_log
from khayal.utils.forms import parse_form_bool, require_fields
from khayal.utils.uploads import delete_image, save_image

router = APIRouter()
admin_router = APIRouter()

def _get_performance_or_404(db: Session, performance_id: int) -> Performance:
    db_performance = db.query(Performance).filter(Performance.id == performance_id).first()
    if db_performance is None:
        raise NotFound("Performance not found")
    return db_performance

def _validate_fields(title, date, venue, city, description) -> str:
    require_fields(title=title, date=date, venue=venue, city=city, description=description)
    if parse_performance_date(date) is None:
        raise ValidationError("date must be an ISO date (YYYY-MM-DD)")
    return date.strip()

@router.get("", response_model=PerformanceListing)
async def read_active_performances(db: Session = Depends(get_db)):
    """Public listing of active performances split into upcoming and previous."""
    performances = db.query(Performance).filter(Performance.active == True).all()  # noqa: E712
    upcoming, previous = partition_performances(performances)
    return {"upcoming": upcoming, "previous": previous}

@admin_router.get("", response_model=List[PerformanceInDB])
async def read_performances(
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """All performances, newest date first."""
    return db.query(Performance).order_by(Performance.date.desc(), Performance.id.desc()).all()

@admin_router.get("/{performance_id}", response_model=PerformanceInDB)
async def read_performance(
    performance_id: int,
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    return _get_performance_or_404(db, performance_id)

@admin_router.post("", response_model=PerformanceInDB, status_code=status.HTTP_201_CREATED)
async def create_performance(
    request: Request,
    title: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    venue: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    ticket_link: Optional[str] = Form(None, alias="ticketLink"),
    active: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """Create a performance. An image upload is required."""
    performance_date = _validate_fields(title, date, venue, city, description)
    is_active = parse_form_bool(active, True, "active")

    image_path = await save_image(image)
    if image_path is None:
        raise ValidationError("Image is required")

    db_performance = Performance(
        title=title,
        date=performance_date,
        venue=venue,
        city=city,
        description=description,
        ticket_link=ticket_link or "",
        image=image_path,
        active=is_active
    )
    db.add(db_performance)
    db.commit()
    db.refresh(db_performance)

    create_audit_log(
        db, request,
        action="performance_created",
        entity_type="performance",
        entity_id=db_performance.id,
        user=current_admin.username,
        details={"title": db_performance.title, "date": db_performance.date}
    )
    return db_performance

@admin_router.put("/{performance_id}", response_model=PerformanceInDB)
async def update_performance(
    request: Request,
    performance_id: int,
    title: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    venue: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    ticket_link: Optional[str] = Form(None, alias="ticketLink"),
    active: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """Replace a performance's fields; the image only changes when a new file is uploaded."""
    db_performance = _get_performance_or_404(db, performance_id)
    performance_date = _validate_fields(title, date, venue, city, description)
    is_active = parse_form_bool(active, False, "active")

    new_image = await save_image(image)
    old_image = db_performance.image

    db_performance.title = title
    db_performance.date = performance_date
    db_performance.venue = venue
    db_performance.city = city
    db_performance.description = description
    db_performance.ticket_link = ticket_link or ""
    db_performance.active = is_active
    if new_image:
        db_performance.image = new_image

    db.commit()
    db.refresh(db_performance)

    if new_image and old_image != new_image:
        delete_image(old_image)

    create_audit_log(
        db, request,
        action="performance_updated",
        entity_type="performance",
        entity_id=db_performance.id,
        user=current_admin.username,
        details={"title": db_performance.title, "image_replaced": bool(new_image)}
    )
    return db_performance

@admin_router.delete("/{performance_id}")
async def delete_performance(
    request: Request,
    performance_id: int,
    db: Session = Depends(get_db),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None
):
    """Delete a performance and its stored image."""
    db_performance = _get_performance_or_404(db, performance_id)
    image_path = db_performance.image
    title = db_performance.title

    db.delete(db_performance)
    db.commit()
    delete_image(image_path)

    create_audit_log(
        db, request,
        action="performance_deleted",
        entity_type="performance",
        entity_id=performance_id,
        user=current_admin.username,
        details={"title": title}
    )
    return {"message": "Performance deleted"}
