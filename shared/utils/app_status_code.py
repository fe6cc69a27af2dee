class AppStatusCode:
    # ---------- Validation ----------
    INVALID_INPUT = "200"
    INSUFFICIENT_STOCK = "202"

    # ---------- Data ----------
    DATA_NOT_FOUND = "300"
    REFERENCE_CONFLICT = "301"

    # ---------- Authentication ----------
    AUTHENTICATION_CREDENTIALS_INVALID = "400"
    AUTHENTICATION_TOKEN_INVALID = "401"
    AUTHENTICATION_TOKEN_EXPIRED = "402"
    AUTHENTICATION_SESSION_TIMEOUT = "403"
    AUTHENTICATION_USER_INVALID = "404"
    AUTHENTICATION_USER_INACTIVE = "405"

    # ---------- Server ----------
    OPERATION_FAILED = "500"
