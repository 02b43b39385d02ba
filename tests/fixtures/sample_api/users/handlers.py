from http import HTTPStatus

from sample_api.web import JSONResponse, Response


def get_user_profile(request):
    return Response(body={"id": 1})


def create_user(request):
    return Response(body={"id": 2}, status=201)


def annotated_handler(request):
    """
    @ID fetch-the-user
    @Tag Accounts
    @Tag Accounts
    @Tag Profiles
    @Summary Fetch a user
    @Description First line.
    Second line.
    @StatusCode 202
    @Deprecated
    @Error 404 User not found
    @Error 409
    """
    return Response(body=None, status=200)


def described_handler(request):
    """described_handler returns the current user.

    @Summary Current user
    """
    return Response(body={"id": 3})


def accepted_via_constant(request):
    if request:
        return JSONResponse({"queued": True}, status_code=HTTPStatus.ACCEPTED)
    return JSONResponse(None, status_code=400)


def computed_status(request):
    code = 200 + 1
    return Response(body=None, status=code)


def get_item(request):
    """@Summary Get a user item"""
    return Response(body={})


class ProfileHandlers:
    def update_profile(self, request):
        """
        @Summary Update the profile
        """
        return Response(status=200)

    def get_item(self, request):
        """@Summary Method get_item"""
        return Response(body={})
