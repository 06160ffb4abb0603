"""Car model."""

from sqlalchemy import CheckConstraint, Column, Float, Integer, String

from dealership.database import Base
from dealership.models.mixins import TimestampMixin


class Car(Base, TimestampMixin):
    """A car listed in the dealership inventory."""

    __tablename__ = "cars"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_cars_price_non_negative"),
        CheckConstraint("mileage >= 0", name="ck_cars_mileage_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    price = Column(Float, nullable=False, index=True)
    mileage = Column(Float, nullable=False, index=True)
    color = Column(String(50), nullable=False, index=True)
    image_url = Column(String(2048), nullable=False)
