"""
书籍管理端到端测试
测试完整的书籍管理工作流程
"""
import pytest
from datetime import datetime

from tests.fixtures.sample_data import SAMPLE_BOOKS


@pytest.mark.e2e
class TestBookManagementFlow:
    """书籍管理端到端测试类"""

    def test_complete_book_lifecycle(self, client):
        """测试完整的书籍生命周期"""
        # 1. 创建书籍
        book_data = {
            "title": "Go in Action",
            "author": "William Kennedy",
            "isbn": "978-1-333",
            "publication_year": 2015,
        }
        create_response = client.post("/api/books", json=book_data)
        assert create_response.status_code == 201
        book = create_response.json()["data"]
        assert book["id"] == 1

        # 2. 验证书籍创建成功
        get_response = client.get("/api/books/1")
        assert get_response.status_code == 200
        retrieved = get_response.json()["data"]
        assert retrieved["title"] == book_data["title"]
        assert retrieved["author"] == book_data["author"]
        assert retrieved["publication_year"] == book_data["publication_year"]

        # 3. 更新书籍（ISBN不变，修改年份）
        update_response = client.put("/api/books/1", json={"isbn": "978-1-333", "publication_year": 2021})
        assert update_response.status_code == 200
        updated = update_response.json()["data"]
        assert updated["publication_year"] == 2021
        assert updated["isbn"] == "978-1-333"
        assert updated["title"] == book_data["title"]
        assert updated["author"] == book_data["author"]
        assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(updated["created_at"])

        # 4. 部分更新标题
        patch_response = client.patch("/api/books/1", params={"title": "Go in Action, 2nd Edition"})
        assert patch_response.status_code == 200
        patched = patch_response.json()["data"]
        assert patched["title"] == "Go in Action, 2nd Edition"
        assert patched["publication_year"] == 2021

        # 5. 删除书籍
        assert client.delete("/api/books/1").status_code == 200

        # 6. 验证书籍已删除
        assert client.get("/api/books/1").status_code == 404
        assert client.delete("/api/books/1").status_code == 404

        # 7. 新书不会复用已删除的id
        recreate = client.post("/api/books", json=book_data)
        assert recreate.status_code == 201
        assert recreate.json()["data"]["id"] == 2

    def test_catalog_queries_flow(self, client):
        """测试导入、查询、统计、清空的完整流程"""
        # 1. 空目录删除作者书籍失败
        assert client.delete("/api/books/author/Nobody").status_code == 404

        # 2. 批量导入
        bulk_response = client.post("/api/books/bulk", json=SAMPLE_BOOKS)
        assert bulk_response.status_code == 201
        assert bulk_response.json()["total"] == len(SAMPLE_BOOKS)

        # 3. 同一批次内ISBN重复时整体失败
        duplicate_batch = [
            {"title": "A", "author": "X", "isbn": "dup-1"},
            {"title": "B", "author": "Y", "isbn": "dup-1"},
        ]
        assert client.post("/api/books/bulk", json=duplicate_batch).status_code == 409
        assert client.get("/api/books/isbn/dup-1").status_code == 404

        # 4. 查询
        by_year = client.get("/api/books/year/2016").json()["data"]
        assert [book["isbn"] for book in by_year] == [SAMPLE_BOOKS[2]["isbn"]]

        authors = client.get("/api/books/authors").json()["data"]
        assert authors == sorted(set(authors))

        # 5. 统计
        stats = client.get("/api/books/stats").json()["data"]
        assert stats == {"total_books": 4, "unique_authors": 3}

        # 6. 按作者删除
        delete_response = client.delete("/api/books/author/Al Sweigart")
        assert delete_response.json()["data"]["deleted"] == 2
        assert "Al Sweigart" not in client.get("/api/books/authors").json()["data"]

        # 7. 清空目录
        assert client.delete("/api/books/all").status_code == 200
        assert client.get("/api/books").json()["data"] == []
        assert client.get("/api/books/count").json()["data"]["count"] == 0
