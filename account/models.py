from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models

RECENT_CITIES_LIMIT = 3


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The given email must be set")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.Role.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    class Role(models.TextChoices):
        USER = "user"
        HOTEL_OWNER = "hotelOwner"
        ADMIN = "admin"

    username = models.CharField(max_length=150, blank=True)
    email = models.EmailField(unique=True)
    clerk_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    phone_number = models.CharField(max_length=32, blank=True)
    image = models.JSONField(default=list, blank=True)
    role = models.CharField(choices=Role, max_length=20, default=Role.USER)
    recent_searched_cities = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    def __str__(self):
        return self.email

    @property
    def is_administrator(self) -> bool:
        return self.is_staff or self.role == self.Role.ADMIN

    @property
    def is_hotel_owner(self) -> bool:
        return self.role == self.Role.HOTEL_OWNER

    def add_recent_search(self, city: str) -> None:
        """Put ``city`` first in the recent list, dropping older duplicates."""
        city = city.strip()
        if not city:
            return
        cities = [
            c for c in self.recent_searched_cities if c.casefold() != city.casefold()
        ]
        self.recent_searched_cities = [city, *cities][:RECENT_CITIES_LIMIT]
        self.save(update_fields=["recent_searched_cities", "updated_at"])
