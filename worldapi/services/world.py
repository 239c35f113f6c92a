"""Read and insert access to the world dataset (city and country tables)."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from worldapi.models import City, Country
from worldapi.schemas.city import CityCreate


class WorldStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_city_by_name(self, name: str) -> City | None:
        """Exact-match lookup; None when no row has this name."""
        return self.db.scalars(select(City).where(City.name == name).order_by(City.id)).first()

    def list_countries(self) -> list[Country]:
        """All countries in one query, ordered by code."""
        return list(self.db.scalars(select(Country).order_by(Country.code)).all())

    def add_city(self, data: CityCreate) -> City:
        city = City(
            name=data.name,
            country_code=data.country_code,
            district=data.district,
            population=data.population,
        )
        self.db.add(city)
        self.db.commit()
        self.db.refresh(city)
        return city
