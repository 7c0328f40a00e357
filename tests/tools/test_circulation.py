"""
Tests for the circulation tools (issue_book, return_book).

1. Input validation
2. Success responses and their structured data
3. Catalog errors reported as isError responses
4. State changes on the served library
"""

from smart_library.tools.circulation import (
    issue_book,
    issue_book_handler,
    return_book,
    return_book_handler,
)


class TestIssueBookTool:
    """Test the issue_book tool."""

    async def test_issue_success(self, installed_library):
        result = await issue_book_handler({"user_id": 1001, "isbn": "111"})

        assert "isError" not in result
        assert result["content"][0]["type"] == "text"
        assert result["content"][0]["text"] == "Book 'Dune' issued to user 'Alice' successfully."

        receipt = result["data"]["receipt"]
        assert receipt["action"] == "issue"
        assert receipt["user_id"] == 1001
        assert receipt["isbn"] == "111"
        assert receipt["borrow_count"] == 1
        assert receipt["borrowed_count"] == 1

        assert installed_library.get_book("111").available is False
        assert installed_library.get_user(1001).borrowed_books == ["111"]

    async def test_issue_with_spaced_isbn(self, installed_library):
        installed_library.add_book("555 ", "Solaris")

        result = await issue_book_handler({"user_id": 1001, "isbn": "555 "})

        assert "isError" not in result
        assert installed_library.get_user(1001).borrowed_books == ["555 "]
        assert installed_library.get_book("555 ").available is False

    async def test_issue_invalid_arguments(self, installed_library):
        result = await issue_book_handler({"user_id": "not-a-number", "isbn": "111"})

        assert result["isError"] is True
        assert "Invalid issue parameters" in result["content"][0]["text"]
        assert "user_id" in result["content"][0]["text"]

    async def test_issue_missing_isbn(self, installed_library):
        result = await issue_book_handler({"user_id": 1001})

        assert result["isError"] is True
        assert "isbn" in result["content"][0]["text"]

    async def test_issue_unknown_user(self, installed_library):
        result = await issue_book_handler({"user_id": 9999, "isbn": "111"})

        assert result["isError"] is True
        assert result["content"][0]["text"] == "User ID 9999 not found"
        assert installed_library.get_book("111").available is True

    async def test_issue_unknown_book(self, installed_library):
        result = await issue_book_handler({"user_id": 1001, "isbn": "999"})

        assert result["isError"] is True
        assert result["content"][0]["text"] == "Book with ISBN 999 not found"

    async def test_issue_unavailable_book(self, installed_library):
        await issue_book_handler({"user_id": 1001, "isbn": "111"})

        result = await issue_book_handler({"user_id": 1002, "isbn": "111"})

        assert result["isError"] is True
        assert "not available for borrowing" in result["content"][0]["text"]
        assert installed_library.get_user(1002).borrowed_books == []

    async def test_issue_at_limit(self, installed_library):
        installed_library.circulation.max_borrowed = 1
        await issue_book_handler({"user_id": 1001, "isbn": "111"})

        result = await issue_book_handler({"user_id": 1001, "isbn": "222"})

        assert result["isError"] is True
        assert "maximum number of books" in result["content"][0]["text"]


class TestReturnBookTool:
    """Test the return_book tool."""

    async def test_return_success(self, installed_library):
        await issue_book_handler({"user_id": 1001, "isbn": "111"})

        result = await return_book_handler({"user_id": 1001, "isbn": "111"})

        assert "isError" not in result
        assert result["content"][0]["text"] == "Book 'Dune' returned by user 'Alice' successfully."
        assert result["data"]["receipt"]["action"] == "return"
        assert result["data"]["receipt"]["borrow_count"] == 1
        assert result["data"]["receipt"]["borrowed_count"] == 0
        assert installed_library.get_book("111").available is True

    async def test_return_not_borrowed(self, installed_library):
        result = await return_book_handler({"user_id": 1001, "isbn": "111"})

        assert result["isError"] is True
        assert result["content"][0]["text"] == "User 1001 has not borrowed book with ISBN 111"

    async def test_return_unknown_user(self, installed_library):
        result = await return_book_handler({"user_id": 9999, "isbn": "111"})

        assert result["isError"] is True
        assert "User ID 9999 not found" in result["content"][0]["text"]

    async def test_return_invalid_user_id(self, installed_library):
        result = await return_book_handler({"user_id": 0, "isbn": "111"})

        assert result["isError"] is True
        assert "Invalid return parameters" in result["content"][0]["text"]


class TestToolDefinitions:
    def test_tool_metadata(self):
        assert issue_book["name"] == "issue_book"
        assert return_book["name"] == "return_book"
        assert issue_book["handler"] is issue_book_handler
        assert set(issue_book["inputSchema"]["required"]) == {"user_id", "isbn"}
