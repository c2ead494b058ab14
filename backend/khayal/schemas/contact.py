from typing import Optional
from pydantic import BaseModel


class ContactRequest(BaseModel):
    # Presence is checked by the endpoint so it can answer in the contact-form error shape
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
