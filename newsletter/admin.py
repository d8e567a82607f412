from django.contrib import admin

from newsletter.models import NewsletterSubscriber


@admin.register(NewsletterSubscriber)
class NewsletterSubscriberAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "is_active", "created_at")
    search_fields = ("email",)
    list_filter = ("is_active",)
