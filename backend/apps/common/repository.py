from typing import Generic, Iterable, Optional, Type, TypeVar

from django.db import models

T = TypeVar("T", bound=models.Model)


class GenericRepository(Generic[T]):
    """Basic ORM access shared by the app repositories."""

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self.model.objects.filter(**filters)

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **fields) -> T:
        for key, value in fields.items():
            setattr(obj, key, value)
        obj.save(update_fields=list(fields) or None)
        return obj

    def delete(self, obj: T) -> None:
        obj.delete()
