"""ORM model for the world dataset's country table."""

from sqlalchemy import CHAR, Column, Float, Integer, SmallInteger, String

from worldapi.models.base import Base


class Country(Base):
    """Read-only here; the table ships with the world dataset."""

    __tablename__ = "country"

    code = Column("Code", CHAR(3), primary_key=True)
    name = Column("Name", CHAR(52), nullable=False, default="")
    continent = Column("Continent", String(20), nullable=False, default="Asia")
    region = Column("Region", CHAR(26), nullable=False, default="")
    surface_area = Column("SurfaceArea", Float, nullable=False, default=0.0)
    indep_year = Column("IndepYear", SmallInteger, nullable=True)
    population = Column("Population", Integer, nullable=False, default=0)
    life_expectancy = Column("LifeExpectancy", Float, nullable=True)
    gnp = Column("GNP", Float, nullable=True)
    gnp_old = Column("GNPOld", Float, nullable=True)
    local_name = Column("LocalName", CHAR(45), nullable=False, default="")
    government_form = Column("GovernmentForm", CHAR(45), nullable=False, default="")
    head_of_state = Column("HeadOfState", CHAR(60), nullable=True)
    capital = Column("Capital", Integer, nullable=True)
    code2 = Column("Code2", CHAR(2), nullable=False, default="")
