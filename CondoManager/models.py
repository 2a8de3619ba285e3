from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Numeric, Text, func
from sqlalchemy.orm import relationship, declarative_base

from CondoManager.constants import PENDING, DEFAULT_PROPERTY_TYPE


Base = declarative_base()


class User(Base):
    """
    Represents an application user.

    Attributes:
        user_id (int): Primary key.
        username (str): Login name (unique, matched exactly).
        password_hash (str): bcrypt hash of the password.
        email (str): Contact email.
        created_time (datetime): Creation timestamp.
        properties (list[Property]): Units owned by the user.
        messages (list[Message]): Board posts written by the user.
    """
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    email = Column(String)
    created_time = Column(DateTime, default=func.now(), nullable=False)

    properties = relationship("Property", back_populates="owner")
    messages = relationship("Message", back_populates="author")


class Property(Base):
    """
    Represents a managed unit.

    Attributes:
        property_id (int): Primary key.
        user_id (int): Foreign key to the owning user.
        nickname (str): Short display name.
        property_type (str): Kind of unit (defaults to "Condo").
        street (str): Street address.
        city (str): City.
        state (str): State.
        zip (str): Postal code.
    """
    __tablename__ = "properties"

    property_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"))
    nickname = Column(String, nullable=False)
    property_type = Column(String, default=DEFAULT_PROPERTY_TYPE)
    street = Column(String)
    city = Column(String)
    state = Column(String)
    zip = Column(String)

    owner = relationship("User", back_populates="properties")
    maintenance_requests = relationship("MaintenanceRequest", back_populates="property")
    expenses = relationship("Expense", back_populates="property")


class MaintenanceRequest(Base):
    """
    Represents a repair ticket for a unit.

    Status moves from Pending to Completed only; completing stamps
    `date_completed`.

    Attributes:
        request_id (int): Primary key.
        property_id (int): Foreign key to the Property table.
        description (str): What needs fixing.
        status (str): "Pending" or "Completed".
        date_reported (datetime): When the request was filed.
        date_completed (datetime): When the request was completed.
    """
    __tablename__ = "maintenance_requests"

    request_id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.property_id"), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String, default=PENDING, nullable=False)
    date_reported = Column(DateTime, default=func.now(), nullable=False)
    date_completed = Column(DateTime)

    property = relationship("Property", back_populates="maintenance_requests")


class Expense(Base):
    """
    Represents money spent on a unit.

    Attributes:
        expense_id (int): Primary key.
        property_id (int): Foreign key to the Property table.
        expense_category (str): Category label (e.g. "Repairs").
        amount (Decimal): Amount spent.
        expense_date (date): Date of the expense.
        vendor (str): Who was paid.
    """
    __tablename__ = "expenses"

    expense_id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.property_id"), nullable=False)
    expense_category = Column(String)
    amount = Column(Numeric(10, 2), nullable=False)
    expense_date = Column(Date, nullable=False)
    vendor = Column(String)

    property = relationship("Property", back_populates="expenses")


# Message board
class Message(Base):
    __tablename__ = "messages"

    message_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    message = Column(Text, nullable=False)
    created_time = Column(DateTime, default=func.now(), nullable=False)

    author = relationship("User", back_populates="messages")


class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    event_id = Column(Integer, primary_key=True, index=True)
    event_title = Column(String, nullable=False)
    start_time = Column(DateTime, nullable=False)
