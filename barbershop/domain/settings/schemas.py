"""Business settings schemas - Pydantic models for validation"""

from pydantic import Field, field_validator, model_validator

from ...schemas import CamelModel
from ...shared.validators import validate_email

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class Service(CamelModel):
    """A bookable service offered by the shop"""

    id: str
    name: str = Field(min_length=1)
    duration: int = Field(gt=0)  # minutes
    price: float = Field(ge=0)


class WorkingDays(CamelModel):
    monday: bool = True
    tuesday: bool = True
    wednesday: bool = True
    thursday: bool = True
    friday: bool = True
    saturday: bool = True
    sunday: bool = False


class BusinessSettings(CamelModel):
    """Schema for the singleton business settings record"""

    business_name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    start_hour: int = Field(ge=0, le=23)
    end_hour: int = Field(ge=0, le=23)
    appointment_duration: int = Field(gt=0)
    working_days: WorkingDays = Field(default_factory=WorkingDays)
    services: list[Service] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if v:
            return validate_email(v)
        return v

    @model_validator(mode="after")
    def check_hours_and_services(self):
        if self.start_hour >= self.end_hour:
            raise ValueError("startHour must be before endHour")

        seen = set()
        for service in self.services:
            key = service.name.strip().lower()
            if key in seen:
                raise ValueError(f"Duplicate service name: {service.name}")
            seen.add(key)
        return self


DEFAULT_SETTINGS = BusinessSettings(
    business_name="Elite Barber Shop",
    phone="(555) 123-4567",
    email="info@elitebarbershop.com",
    address="123 Main Street, City, State 12345",
    start_hour=9,
    end_hour=18,
    appointment_duration=30,
    working_days=WorkingDays(),
    services=[
        Service(id="1", name="Haircut", duration=30, price=25),
        Service(id="2", name="Beard Trim", duration=15, price=15),
        Service(id="3", name="Haircut + Beard", duration=45, price=35),
        Service(id="4", name="Shampoo & Style", duration=20, price=20),
        Service(id="5", name="Hot Towel Shave", duration=30, price=30),
    ],
)
