from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from account.models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("email",)
    list_display = ("id", "email", "username", "role", "clerk_id", "is_staff")
    list_filter = ("role", "is_staff", "is_active")
    search_fields = ("email", "username", "clerk_id")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            "Personal info",
            {"fields": ("username", "first_name", "last_name", "phone_number", "image")},
        ),
        ("Luxor Stays", {"fields": ("role", "clerk_id", "recent_searched_cities")}),
        (
            "Permissions",
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2", "role"),
            },
        ),
    )
