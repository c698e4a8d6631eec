"""
Factory Boy factories for authentication models.

Provides realistic test data generation for:
- User: Email-identified user (profile auto-created by signal)
- Department: Academic department

Usage:
    from authentication.tests.factories import UserFactory, DepartmentFactory

    # Student with a named profile
    user = UserFactory(profile__full_name="Alice Rahman")

    # Faculty member
    teacher = UserFactory(profile__is_faculty=True)
"""

import factory

from authentication.models import Department, User


class DepartmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Department
        django_get_or_create = ("code",)

    code = "CSE"
    name = "Computer Science & Engineering"


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    The profile is created by the post_save signal; ``profile__<field>``
    keyword arguments are written onto it afterwards.

    Examples:
        # Basic student
        user = UserFactory()

        # Staff user
        user = UserFactory(is_staff=True)

        # Profile fields
        user = UserFactory(profile__semester=5, profile__section="2")
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"student{n}@eastdelta.edu.bd")
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )

    @factory.post_generation
    def profile(obj, create, extracted, **kwargs):
        if not create:
            return
        profile = obj.profile
        kwargs.setdefault("full_name", obj.email.split("@")[0].title())
        for name, value in kwargs.items():
            setattr(profile, name, value)
        profile.save()
