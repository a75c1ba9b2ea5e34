# app/database/database.py
"""
Configuración de la base de datos SQLAlchemy y sus modelos.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import relationship, sessionmaker

from app.core.config import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class User(Base):
    """Identidad del empleado y su tipo de horario asignado."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    schedule_type = Column(String(10), nullable=True)  # "H1", "H2", ...
    created_at = Column(DateTime, default=datetime.utcnow)

    day_records = relationship("DayRecordRow", back_populates="user")


class JobRow(Base):
    """Trabajo al que se cargan las actividades."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(30), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    active = Column(Boolean, default=True, nullable=False)


class DayRecordRow(Base):
    """Registro diario de un usuario: configuración del día y sus actividades."""

    __tablename__ = "day_records"
    __table_args__ = (UniqueConstraint("user_id", "date_key", name="uq_day_records_user_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date_key = Column(String(10), nullable=False)  # YYYY-MM-DD en UTC-6
    entry_time = Column(String(30), nullable=False)  # instante ISO
    exit_time = Column(String(30), nullable=False)
    shift_label = Column(String(1), default="D", nullable=False)
    is_free_day = Column(Boolean, default=False, nullable=False)
    continuous_shift = Column(Boolean, default=False, nullable=False)
    comment = Column(Text, default="")
    supervisor_approved = Column(Boolean, default=False, nullable=False)
    hr_approved = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relaciones
    user = relationship("User", back_populates="day_records")
    activities = relationship(
        "ActivityRow",
        back_populates="day_record",
        order_by="ActivityRow.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<DayRecordRow(id={self.id}, user_id={self.user_id}, date_key={self.date_key})>"


class ActivityRow(Base):
    """Una actividad del registro diario, ordenada por posición."""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day_record_id = Column(Integer, ForeignKey("day_records.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=True)
    duration_hours = Column(Float, nullable=False, default=0.0)
    is_overtime = Column(Boolean, default=False, nullable=False)
    class_name = Column(String(50), nullable=True)
    start = Column(String(30), nullable=True)  # ISO instant, solo horas extra
    end = Column(String(30), nullable=True)

    # Relaciones
    day_record = relationship("DayRecordRow", back_populates="activities")
    job = relationship("JobRow")

    def __repr__(self):
        return f"<ActivityRow(id={self.id}, position={self.position}, hours={self.duration_hours})>"


def create_tables():
    """Crea todas las tablas."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependencia que entrega una sesión de base de datos."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
