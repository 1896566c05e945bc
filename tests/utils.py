from faker import Faker

from tests.schemas import UserCredentials


def generate_user_credentials() -> UserCredentials:
    """
    Generate random registration data (name, email and password)
    Returns:
        UserCredentials: Generated name, email and password
    """
    faker = Faker()
    password = (
        faker.password(
            length=12, special_chars=False, digits=True, upper_case=True, lower_case=True
        )
        + "@%&"
    )
    return UserCredentials(name=faker.name(), email=faker.unique.safe_email(), password=password)
