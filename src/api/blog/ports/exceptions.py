"""Port exceptions for the blog bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. Repositories raise them in place of store-specific
errors; the application layer records and re-raises them.
"""


class DuplicateEmailError(Exception):
    """Raised when a user email is already registered to another user.

    Email addresses are globally unique. The application layer should
    handle this and provide appropriate feedback to the user.
    """

    pass


class DuplicatePostTitleError(Exception):
    """Raised when a post title is already used by another post.

    Post titles are globally unique.
    """

    pass


class UserNotFoundError(Exception):
    """Raised when a user cannot be found.

    Also raised when a post references an author that does not exist.
    """

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class PostNotFoundError(Exception):
    """Raised when a post cannot be found."""

    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


class UserHasPostsError(Exception):
    """Raised when attempting to delete a user who still authors posts.

    Posts reference their author with a restricting foreign key. The posts
    must be deleted before the user can be.
    """

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} still authors posts")
        self.user_id = user_id
