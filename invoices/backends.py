from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

User = get_user_model()


class EmailOrUsernameBackend(ModelBackend):
    """Lets the sign-in form accept either an email address or a username."""

    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None:
            return None

        user = None
        if "@" in username:
            user = User.objects.filter(email__iexact=username).order_by("pk").first()
        if user is None:
            user = User.objects.filter(username__iexact=username).first()

        if user is None:
            # Run the hasher anyway so timing does not reveal unknown accounts.
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
