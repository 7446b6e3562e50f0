from pydantic import BaseModel
from typing import Optional


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class CustomerCreate(BaseModel):
    name: str
    email: str
    phone: str
    company: Optional[str] = None
    website: Optional[str] = None
    address: Optional[Address] = None
    tax_id: Optional[str] = None
    currency: Optional[str] = None
    payment_terms: Optional[str] = None
    credit_limit: Optional[float] = None
    opening_balance: Optional[float] = None
    notes: Optional[str] = None


class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    address: Optional[Address] = None
    tax_id: Optional[str] = None
    currency: Optional[str] = None
    payment_terms: Optional[str] = None
    credit_limit: Optional[float] = None
    opening_balance: Optional[float] = None
    notes: Optional[str] = None
    status: Optional[str] = None
