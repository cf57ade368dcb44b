from __future__ import annotations
from typing import Dict, List


DEFAULT_LOCALE = "en"


MESSAGES: Dict[str, dict] = {
    "en": {
        "recommendation": (
            "Based on your test results, I recommend focusing more time on {name} "
            "where your current performance is {performance}%. "
            "With consistent practice on {weak_areas}, "
            "you could improve by approximately {improvement}% in this subject."
        ),
        "area_labels": {
            "concept understanding": "Concept understanding",
            "problem solving": "Problem solving",
            "application": "Application",
            "general review": "General review",
        },
        "and": " and ",
        "list_sep": ", ",
        "priority_labels": {"high": "High", "medium": "Medium", "low": "Low"},
        "time_of_day_labels": {
            "morning": "morning",
            "afternoon": "afternoon",
            "evening": "evening",
            "night": "night",
        },
        "chat_keywords": {
            "schedule_change": ["change schedule", "adjust schedule"],
            "study_tips": ["how should i study", "study tips"],
            "focus": ["time management", "focus better"],
            "how_to": ["how do i", "what should i"],
        },
        "chat": {
            "schedule_change": (
                "I'd be happy to adjust your schedule, {learner}. Based on your current plan, "
                "I've allocated the most time to {subject} since it needs the most attention. "
                "Would you like to make changes to a specific day or subject?"
            ),
            "study_tips": (
                "For effective studying, I recommend:\n"
                "1. Use active recall rather than passive review\n"
                "2. Space out your study sessions for better retention\n"
                "3. For {subject}, focus on {weak_areas}\n"
                "4. Take 5-minute breaks every 25 minutes to maintain focus\n"
                "5. Review material before sleeping to improve memory consolidation"
            ),
            "focus_low": (
                "Since you mentioned having difficulty focusing, try:\n"
                "1. Using the Pomodoro technique (25 min work, 5 min break)\n"
                "2. Eliminating distractions by putting your phone in another room\n"
                "3. Working in a designated study space\n"
                "4. Using website blockers during study sessions"
            ),
            "focus_medium": (
                "To improve your average focus level:\n"
                "1. Set clear goals for each study session\n"
                "2. Take short breaks between subjects\n"
                "3. Use ambient noise or instrumental music to maintain concentration\n"
                "4. Consider studying at your peak energy time ({time_of_day})"
            ),
            "focus_high": (
                "To maintain your already strong focus level:\n"
                "1. Challenge yourself with increasingly difficult problems\n"
                "2. Teach concepts to others to solidify understanding\n"
                "3. Use interleaving (mixing related topics) to deepen knowledge\n"
                "4. Reward yourself after completing difficult tasks"
            ),
            "subject": (
                "For {subject}, your current performance is at {performance}%.\n"
                "I've allocated {hours} hours per week to this subject.\n"
                "Focus areas: {weak_areas}.\n"
                "With consistent practice, you could improve by approximately "
                "{improvement}% over the next 4 weeks."
            ),
            "how_to": (
                "That's a great question! Based on your study profile, I recommend focusing on "
                "consistent daily practice rather than cramming. Your schedule is designed to "
                "prioritize your weaker areas first, especially {subject}. "
                "Would you like specific advice for any particular subject?"
            ),
            "defaults": [
                "Based on your study habits, I've optimized your schedule for {time_of_day} "
                "studying with {duration}-minute sessions. Is there a specific part of your "
                "schedule you'd like to discuss?",
                "Looking at your test results, I notice that {subject} might need more attention. "
                "I've allocated more study time for this subject. Does that work for you?",
                "Your schedule is designed for {days} days per week of studying. "
                "Would you like to adjust this or any other aspect of your plan?",
                "I've analyzed your learning patterns and test results to create this personalized "
                "schedule. Following it consistently should help you improve by approximately "
                "{overall}% overall. Is there anything specific you'd like to change?",
            ],
        },
    },
    "ja": {
        "recommendation": (
            "テスト結果に基づき、{name}により多くの時間を割くことをお勧めします。"
            "現在の成績は{performance}%です。"
            "{weak_areas}を重点的に継続して練習すれば、"
            "この科目で約{improvement}%の向上が見込めます。"
        ),
        "area_labels": {
            "concept understanding": "概念理解",
            "problem solving": "問題解決",
            "application": "応用",
            "general review": "総合復習",
        },
        "and": "と",
        "list_sep": "、",
        "priority_labels": {"high": "高", "medium": "中", "low": "低"},
        "time_of_day_labels": {
            "morning": "朝",
            "afternoon": "午後",
            "evening": "夕方",
            "night": "夜",
        },
        "chat_keywords": {
            "schedule_change": ["スケジュールを変更", "スケジュールを調整", "change schedule", "adjust schedule"],
            "study_tips": ["勉強方法", "勉強のコツ", "how should i study", "study tips"],
            "focus": ["時間管理", "集中", "time management", "focus better"],
            "how_to": ["どうすれば", "何をすれば", "how do i", "what should i"],
        },
        "chat": {
            "schedule_change": (
                "{learner}さん、スケジュールの調整をお手伝いします。現在のプランでは、"
                "最も注意が必要な{subject}に最も多くの時間を割り当てています。"
                "特定の曜日や科目を変更しますか？"
            ),
            "study_tips": (
                "効果的な勉強のために、次のことをお勧めします：\n"
                "1. 受け身の復習ではなくアクティブリコールを使う\n"
                "2. 学習セッションを分散させて記憶の定着を高める\n"
                "3. {subject}では{weak_areas}に重点を置く\n"
                "4. 25分ごとに5分の休憩を取って集中力を保つ\n"
                "5. 寝る前に復習して記憶の定着を促す"
            ),
            "focus_low": (
                "集中するのが難しい場合は、次を試してください：\n"
                "1. ポモドーロ・テクニック（25分作業、5分休憩）を使う\n"
                "2. スマートフォンを別の部屋に置いて誘惑を減らす\n"
                "3. 勉強専用のスペースで作業する\n"
                "4. 学習中はウェブサイトブロッカーを使う"
            ),
            "focus_medium": (
                "平均的な集中力をさらに高めるには：\n"
                "1. 各セッションに明確な目標を設定する\n"
                "2. 科目の間に短い休憩を取る\n"
                "3. 環境音やインストゥルメンタル音楽で集中を保つ\n"
                "4. エネルギーが高い時間帯（{time_of_day}）に勉強する"
            ),
            "focus_high": (
                "すでに高い集中力を維持するには：\n"
                "1. 徐々に難しい問題に挑戦する\n"
                "2. 他の人に教えて理解を深める\n"
                "3. インターリーブ（関連トピックを混ぜる）で知識を深める\n"
                "4. 難しい課題を終えたら自分にご褒美を与える"
            ),
            "subject": (
                "{subject}の現在の成績は{performance}%です。\n"
                "この科目には週{hours}時間を割り当てています。\n"
                "重点分野：{weak_areas}。\n"
                "継続して練習すれば、今後4週間で約{improvement}%の向上が見込めます。"
            ),
            "how_to": (
                "良い質問ですね！あなたの学習プロフィールから、詰め込みよりも毎日の継続的な"
                "練習をお勧めします。スケジュールは苦手分野、特に{subject}を優先するように"
                "作られています。特定の科目についてアドバイスが必要ですか？"
            ),
            "defaults": [
                "あなたの学習習慣に合わせて、{time_of_day}に{duration}分のセッションで"
                "スケジュールを最適化しました。話し合いたい部分はありますか？",
                "テスト結果を見ると、{subject}にもっと注意が必要かもしれません。"
                "この科目の学習時間を多めに割り当てました。よろしいですか？",
                "スケジュールは週{days}日の学習を前提にしています。"
                "これや他の部分を調整しますか？",
                "学習パターンとテスト結果を分析して、このスケジュールを作成しました。"
                "継続すれば全体で約{overall}%の向上が見込めます。変更したい点はありますか？",
            ],
        },
    },
}


def get_messages(locale: str) -> dict:
    try:
        return MESSAGES[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale!r}") from None


def area_label(tag: str, locale: str) -> str:
    return get_messages(locale)["area_labels"].get(tag, tag)


def join_areas(tags: List[str], locale: str, fallback: str, sep_key: str = "and") -> str:
    """
    Render weak-area tags as display labels joined by the locale's separator.
    An empty list renders the fallback label.
    """
    messages = get_messages(locale)
    labels = [area_label(t, locale) for t in (tags or [fallback])]
    return messages[sep_key].join(labels)
