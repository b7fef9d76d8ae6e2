"""UI texts rendered by the web shop's login and registration forms."""


class ErrorMessages:
    LOGIN_UNSUCCESSFUL = "Login was unsuccessful. Please correct the errors and try again."
    NO_CUSTOMER_FOUND = "No customer account found"
    INVALID_EMAIL = "Please enter a valid email address."
    EMAIL_EXISTS = "The specified email already exists"
    PASSWORD_MISMATCH = "The password and confirmation password do not match."
    FIRST_NAME_REQUIRED = "First name is required."
    LAST_NAME_REQUIRED = "Last name is required."
    EMAIL_REQUIRED = "Email is required."
    PASSWORD_REQUIRED = "Password is required."


class InfoMessages:
    LOGGED_OUT_LINK = "Log out"
    REGISTRATION_COMPLETED = "Your registration completed"
    # Not confirmed to exist on the target site
    ALREADY_LOGGED_IN = "You are already logged in"
