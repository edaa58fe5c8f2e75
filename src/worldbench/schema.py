from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class World(Base):
    __tablename__ = "world"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    random_number: Mapped[int] = mapped_column("randomnumber", Integer, nullable=False)

    def __repr__(self) -> str:
        return f"World(id={self.id}, random_number={self.random_number})"
