import pytest

from users_api.email_validation import is_valid_email


@pytest.mark.parametrize("email", [
    "jerry@seinfeld.com",
    "cosmo.kramer@kramerica.com",
    "elaine+jpeterman@catalog.co.uk",
    "art_vandelay@latex.io",
    "5150@bobsacamano.com",
    "george@yankees.example.com",
])
def test_valid_email_formats(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", [
    "hellonewman",
    "@manssiere.com",
    "soup_nazi@",
    "bizzaro_jerry@.com",
    "bubble boy @spaceship.com",
    "babu@dreamcafe",
    "",
    "puddy@saab..dealership",
    "jerry@seinfeld.com\n",
])
def test_invalid_email_formats(email):
    assert not is_valid_email(email)
