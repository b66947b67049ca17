from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={"invalid": "Invalid email address"})
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        trim_whitespace=False,
        error_messages={"min_length": "Password must be at least 6 characters"},
    )

    def validate_email(self, value):
        return value.strip().lower()


class AdminProfileSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    email = serializers.EmailField(read_only=True)
    name = serializers.SerializerMethodField()

    def get_name(self, user):
        return user.get_full_name() or user.username
