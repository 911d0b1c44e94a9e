"""
検索クエリ構築モジュール
"""

from collections.abc import Iterable


def build_mention_query(
    user_id: str,
    after: str,
    before: str,
    names: Iterable[str] = (),
) -> str:
    """
    自分宛メンションの検索クエリを構築

    ヒット率を上げるため to:me、<@USER_ID>、名前の直接入力を OR で並べる。

    Args:
        user_id: メンション対象のユーザーID
        after: 開始日 (YYYY-MM-DD)
        before: 終了日 (YYYY-MM-DD, この日を含まない)
        names: 追加で OR 検索する名前

    Returns:
        Slack検索構文のクエリ文字列
    """
    conditions = ["to:me", f"<@{user_id}>"]
    for name in names:
        cleaned = name.replace('"', "").strip()
        if cleaned:
            conditions.append(f'"{cleaned}"')

    return f"({' OR '.join(conditions)}) after:{after} before:{before}"
