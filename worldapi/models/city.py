"""ORM model for the world dataset's city table."""

from sqlalchemy import CHAR, Column, Integer

from worldapi.models.base import Base


class City(Base):
    __tablename__ = "city"

    id = Column("ID", Integer, primary_key=True, autoincrement=True)
    name = Column("Name", CHAR(35), nullable=False, default="")
    country_code = Column("CountryCode", CHAR(3), nullable=False, default="", index=True)
    district = Column("District", CHAR(20), nullable=False, default="")
    population = Column("Population", Integer, nullable=False, default=0)
