"""Translations for the UI (English and Traditional Chinese).

Usage::

    from utils.i18n import t
    st.title(t("matches"))
    st.subheader(t("welcomeBack", name=profile["full_name"]))
"""

import streamlit as st

from utils.config import DEFAULT_LANGUAGE

LANGUAGE_KEY = "language"

LANGUAGES = {"en": "English", "zh": "中文"}
LANGUAGE_ALIASES = {"zh-TW": "zh", "zh-HK": "zh"}

TRANSLATIONS = {
    "en": {
        # Navigation
        "dashboard": "Dashboard",
        "matches": "Matches",
        "players": "Players",
        "availability": "Availability",
        "booking": "Pitch Booking",
        "profile": "Profile",
        "logout": "Logout",
        "appName": "Football Team",

        # Authentication
        "login": "Login",
        "loginDescription": "Enter your credentials to access the system",
        "email": "Email",
        "username": "Username",
        "password": "Password",
        "signIn": "Sign In",
        "createUser": "Create New User",
        "createUserDescription": "Register a new team member account",
        "createUserSuccess": "User created successfully! They can now sign in.",
        "fullName": "Full Name",
        "jerseyNumber": "Jersey Number",
        "position": "Position",
        "phone": "Phone",
        "create": "Create",

        # Dashboard
        "welcomeBack": "Welcome back, {name}!",
        "teamStatus": "Here is what's happening with your team",
        "upcomingMatches": "Upcoming Matches",
        "totalPlayers": "Total Players",
        "matchesPlayed": "Matches Played",
        "pendingInvitations": "Pending Invitations",
        "nextMatches": "Your next scheduled matches",
        "noUpcomingMatches": "No upcoming matches",
        "vs": "vs {opponent_team}",

        # Matches
        "createMatch": "Create Match",
        "opponentTeam": "Opponent Team",
        "matchDate": "Match Date",
        "matchTime": "Kick-off Time",
        "location": "Location",
        "homeJerseyColor": "Home Jersey Color",
        "awayJerseyColor": "Away Jersey Color",
        "isHomeGame": "Home Game",
        "keyPlayers": "Key Players",
        "matchDetails": "Match Details",
        "participants": "Participants",
        "yourStatus": "Your status",
        "accept": "Accept",
        "decline": "Decline",
        "pending": "Pending",
        "accepted": "Accepted",
        "declined": "Declined",
        "scheduled": "Scheduled",
        "completed": "Completed",
        "finalScore": "Final Score",
        "recordResult": "Record Result",
        "videoLink": "Video Link",
        "noMatches": "No matches scheduled yet",
        "exportCalendar": "Export to Calendar",

        # Match Events
        "addEvent": "Add Event",
        "goal": "Goal",
        "assist": "Assist",
        "waterBreak": "Water Break",
        "halftime": "Halftime",
        "gameStart": "Game Start",
        "gameEnd": "Game End",
        "eventTime": "Event Time (minutes)",

        # Ratings
        "ratePlayer": "Rate Player",
        "rating": "Rating",
        "comments": "Comments",
        "submitRating": "Submit Rating",

        # Availability
        "addAvailability": "Add Availability",
        "available": "Available",
        "unavailable": "Unavailable",
        "notSet": "Not Set",
        "eventType": "Event Type",
        "training": "Training",
        "match": "Match",
        "notes": "Notes (Optional)",
        "date": "Date",
        "noAvailability": "No availability set for this date",
        "upcomingAvailability": "Upcoming Availability",

        # Players
        "searchPlayers": "Search players...",
        "noPlayers": "No players found",
        "you": "You",

        # Booking
        "bookingInformation": "Pitch Booking Information",
        "bookingDescription": "Browse available turf soccer pitch sessions",
        "filters": "Filters",
        "filterDescription": "Narrow down sessions by venue, district and date",
        "searchVenue": "Search venue...",
        "district": "District",
        "allDistricts": "All Districts",
        "pickDate": "Pick a date",
        "showAvailableOnly": "Show available only",
        "venue": "Venue",
        "session": "Session",
        "availableCourts": "Available Courts",
        "sortBy": "Sort by",
        "noResults": "No results.",

        # Common
        "save": "Save",
        "cancel": "Cancel",
        "edit": "Edit",
        "delete": "Delete",
        "loading": "Loading...",
        "error": "Error",
        "success": "Success",
        "language": "Language",
    },
    "zh": {
        # Navigation
        "dashboard": "儀表板",
        "matches": "比賽",
        "players": "球員",
        "availability": "可用性",
        "booking": "球場預訂",
        "profile": "個人資料",
        "logout": "登出",
        "appName": "足球隊",

        # Authentication
        "login": "登入",
        "loginDescription": "輸入您的憑證以進入系統",
        "email": "電郵",
        "username": "用戶名",
        "password": "密碼",
        "signIn": "登入",
        "createUser": "創建新用戶",
        "createUserDescription": "為新隊員註冊帳戶",
        "createUserSuccess": "用戶創建成功！現在可以登入。",
        "fullName": "全名",
        "jerseyNumber": "球衣號碼",
        "position": "位置",
        "phone": "電話",
        "create": "創建",

        # Dashboard
        "welcomeBack": "歡迎回來，{name}！",
        "teamStatus": "球隊最新狀況",
        "upcomingMatches": "即將舉行的比賽",
        "totalPlayers": "球員總數",
        "matchesPlayed": "已進行比賽",
        "pendingInvitations": "待回覆邀請",
        "nextMatches": "您接下來的比賽",
        "noUpcomingMatches": "沒有即將舉行的比賽",
        "vs": "對 {opponent_team}",

        # Matches
        "createMatch": "創建比賽",
        "opponentTeam": "對手球隊",
        "matchDate": "比賽日期",
        "matchTime": "開球時間",
        "location": "地點",
        "homeJerseyColor": "主場球衣顏色",
        "awayJerseyColor": "客場球衣顏色",
        "isHomeGame": "主場比賽",
        "keyPlayers": "關鍵球員",
        "matchDetails": "比賽詳情",
        "participants": "參與者",
        "yourStatus": "您的狀態",
        "accept": "接受",
        "decline": "拒絕",
        "pending": "待定",
        "accepted": "已接受",
        "declined": "已拒絕",
        "scheduled": "已安排",
        "completed": "已完成",
        "finalScore": "最終比分",
        "recordResult": "記錄賽果",
        "videoLink": "影片連結",
        "noMatches": "尚未安排任何比賽",
        "exportCalendar": "匯出至日曆",

        # Match Events
        "addEvent": "添加事件",
        "goal": "進球",
        "assist": "助攻",
        "waterBreak": "飲水休息",
        "halftime": "中場休息",
        "gameStart": "比賽開始",
        "gameEnd": "比賽結束",
        "eventTime": "事件時間（分鐘）",

        # Ratings
        "ratePlayer": "評分球員",
        "rating": "評分",
        "comments": "評論",
        "submitRating": "提交評分",

        # Availability
        "addAvailability": "添加可用性",
        "available": "可出席",
        "unavailable": "未能出席",
        "notSet": "未設定",
        "eventType": "活動類型",
        "training": "訓練",
        "match": "比賽",
        "notes": "備註（可選）",
        "date": "日期",
        "noAvailability": "此日期尚未設定可用性",
        "upcomingAvailability": "未來可用性",

        # Players
        "searchPlayers": "搜尋球員...",
        "noPlayers": "找不到球員",
        "you": "你",

        # Booking
        "bookingInformation": "球場預訂資訊",
        "bookingDescription": "瀏覽可預訂的人造草足球場時段",
        "filters": "篩選",
        "filterDescription": "按場地、地區及日期篩選時段",
        "searchVenue": "搜尋場地...",
        "district": "地區",
        "allDistricts": "所有地區",
        "pickDate": "選擇日期",
        "showAvailableOnly": "只顯示可預訂",
        "venue": "場地",
        "session": "時段",
        "availableCourts": "可用場數",
        "sortBy": "排序",
        "noResults": "沒有結果。",

        # Common
        "save": "保存",
        "cancel": "取消",
        "edit": "編輯",
        "delete": "刪除",
        "loading": "載入中...",
        "error": "錯誤",
        "success": "成功",
        "language": "語言",
    },
}

# Match event codes stored in the database -> translation keys
MATCH_EVENT_LABELS = {
    "goal": "goal",
    "assist": "assist",
    "water_break": "waterBreak",
    "halftime": "halftime",
    "game_start": "gameStart",
    "game_end": "gameEnd",
}


def normalize_language(language):
    """Map aliases such as ``zh-TW`` to a supported code; unknown codes become ``en``."""
    language = LANGUAGE_ALIASES.get(language, language)
    return language if language in TRANSLATIONS else "en"


def get_language():
    return normalize_language(st.session_state.get(LANGUAGE_KEY, DEFAULT_LANGUAGE))


def set_language(language):
    st.session_state[LANGUAGE_KEY] = normalize_language(language)


def t(key, language=None, **params):
    """Translate ``key``; falls back to English, then to the key itself."""
    language = normalize_language(language) if language else get_language()
    text = TRANSLATIONS[language].get(key) or TRANSLATIONS["en"].get(key) or key
    if params:
        text = text.format(**params)
    return text
