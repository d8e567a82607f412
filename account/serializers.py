from django.contrib.auth import get_user_model
from rest_framework import serializers


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = get_user_model()
        fields = (
            "id",
            "email",
            "password",
            "username",
            "first_name",
            "last_name",
            "phone_number",
            "image",
            "role",
            "clerk_id",
            "recent_searched_cities",
            "is_staff",
        )
        read_only_fields = ("id", "is_staff", "clerk_id", "recent_searched_cities")
        extra_kwargs = {"password": {"write_only": True, "min_length": 5}}

    def validate_role(self, value):
        if value == get_user_model().Role.ADMIN:
            raise serializers.ValidationError("The admin role cannot be self-assigned.")
        return value

    def create(self, validated_data):
        """Create a new user with encrypted password and return it"""
        return get_user_model().objects.create_user(**validated_data)

    def update(self, instance, validated_data):
        """Update a user, set the password correctly and return it"""
        password = validated_data.pop("password", None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save()

        return user


class ClerkSyncSerializer(serializers.Serializer):
    email = serializers.EmailField()
    clerkId = serializers.CharField(max_length=255)
    firstName = serializers.CharField(required=False, allow_blank=True)
    lastName = serializers.CharField(required=False, allow_blank=True)
    profileImageUrl = serializers.URLField(required=False, allow_blank=True)
    phoneNumber = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        taken = (
            get_user_model().objects
            .filter(clerk_id=attrs["clerkId"])
            .exclude(email=attrs["email"])
            .exists()
        )
        if taken:
            raise serializers.ValidationError(
                {"clerkId": "This clerkId is linked to another account."}
            )
        return attrs

    def save(self, **kwargs):
        data = self.validated_data
        user, created = get_user_model().objects.get_or_create(
            email=data["email"],
            defaults={"clerk_id": data["clerkId"]},
        )
        if created:
            user.set_unusable_password()

        user.clerk_id = data["clerkId"]
        user.first_name = data.get("firstName") or user.first_name
        user.last_name = data.get("lastName") or user.last_name
        user.phone_number = data.get("phoneNumber") or user.phone_number
        if data.get("profileImageUrl"):
            user.image = [data["profileImageUrl"]]
        user.save()
        self.instance = user
        return user


class RecentCitySerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100)
