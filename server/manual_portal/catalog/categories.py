"""Static category taxonomy for the manual portal.

Each main category carries its canonical ``name`` (matched exactly against
``manuals.main_category``), a display label, a URL slug and the ordered list
of subcategories that defines default display order.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Category:
    key: str
    name: str
    label: str
    slug: str
    subcategories: tuple[str, ...] = ()
    description: str = ""
    icon_name: str = "FileText"


_CATEGORY_LIST: tuple[Category, ...] = (
    Category(
        key="onboarding_registration",
        name="入社（入社日までに登録）",
        label="入社（入社日までに登録）",
        slug="onboarding-registration",
        subcategories=(
            "本人に情報を登録してもらう場合",
            "給与情報の設定",
            "通勤手当の設定",
            "税金関係",
            "保険関係",
            "マイナンバー",
        ),
        description="入社日までに必要な各種情報の登録",
        icon_name="UserPlus",
    ),
    Category(
        key="onboarding_after",
        name="入社（入社日以降に登録）",
        label="入社（入社日以降に登録）",
        slug="onboarding-after",
        subcategories=(
            "住民税を特別徴収に切り替えましょう",
            "住民税の通知書の内容をfreeeに登録しましょう",
            "社会保険の情報を反映する方法　※手続き完了したら設定しましょう！",
            "雇用保険の情報を反映する方法",
        ),
        description="入社後に必要な手続きと設定",
        icon_name="ClipboardList",
    ),
    Category(
        key="director_registration",
        name="役員の登録方法",
        label="役員の登録方法",
        slug="director-registration",
        subcategories=(
            "役員報酬の決定",
            "管理者が情報を登録する場合",
            "税金関係",
            "住民税を特別徴収している場合",
            "社会保険",
            "労働保険(雇用保険)",
        ),
        description="役員の登録に関する手続き",
        icon_name="UserPlus",
    ),
    Category(
        key="bonus",
        name="賞与",
        label="賞与",
        slug="bonus",
        subcategories=("賞与",),
        description="賞与計算と支給に関する手続き",
        icon_name="Gift",
    ),
    Category(
        key="leave",
        name="有休・休暇",
        label="有休・休暇",
        slug="leave",
        subcategories=("正社員の有給休暇", "パートの有給休暇", "特別休暇"),
        description="有給休暇と特別休暇の管理",
        icon_name="Calendar",
    ),
    Category(
        key="resignation",
        name="退職",
        label="退職",
        slug="resignation",
        subcategories=("退職日前に対応するべきこと", "退職日以降の対応するべきこと"),
        description="退職手続きと必要な対応",
        icon_name="UserMinus",
    ),
    Category(
        key="attendance_correction",
        name="勤怠の修正方法",
        label="勤怠の修正方法",
        slug="attendance-correction",
        subcategories=(
            "勤怠の修正、休憩の削除方法",
            "欠勤の登録方法",
            "遅刻・早退した時の設定方法",
            "1日の所定労働時間を変更したい場合",
            "誤って登録した勤怠を修正したい場合",
            "休日の設定方法",
            "振替休日",
            "代休",
            "休日を全員一括で付与する方法",
        ),
        description="勤怠データの修正手順",
        icon_name="Edit3",
    ),
    Category(
        key="shift_system",
        name="1日8時間以内のシフト制",
        label="1日8時間以内のシフト制",
        slug="shift-system",
        subcategories=("シフトパターンの登録", "シフトの登録方法"),
        description="シフト制の設定と管理",
        icon_name="Clock",
    ),
    Category(
        key="monthly_variable_working",
        name="1か月変形労働時間制",
        label="1か月変形労働時間制",
        slug="monthly-variable-working",
        subcategories=(
            "シフトパターンの登録",
            "1か月変形のシフトの登録方法",
            "1か月変形の場合の欠勤控除に関して",
        ),
        description="変形労働時間制の設定と運用",
        icon_name="Calendar",
    ),
    Category(
        key="attendance",
        name="勤怠",
        label="勤怠",
        slug="attendance",
        subcategories=("休日", "その他"),
        description="勤怠管理に関する各種設定",
        icon_name="Clock",
    ),
    Category(
        key="salary_deduction",
        name="給与控除の設定",
        label="給与控除の設定",
        slug="salary-deduction",
        subcategories=("控除額の設定方法",),
        description="給与控除に関する各種設定",
        icon_name="Calculator",
    ),
    Category(
        key="documents",
        name="書類",
        label="書類",
        slug="documents",
        subcategories=("書類のダウンロード",),
        description="各種書類のダウンロード",
        icon_name="Download",
    ),
    Category(
        key="other",
        name="その他",
        label="その他",
        slug="other",
        subcategories=("freeeに招待する方法",),
        description="その他の管理業務に関するマニュアル",
        icon_name="MoreHorizontal",
    ),
    Category(
        key="flex",
        name="フレックス",
        label="フレックス",
        slug="flex",
        subcategories=(),
        description="フレックスタイム制に関する設定と管理",
        icon_name="Clock",
    ),
    Category(
        key="employee_attendance",
        name="（従業員用）勤怠",
        label="（従業員用）勤怠",
        slug="employee-attendance",
        subcategories=(
            "勤怠の方法",
            "欠勤の登録方法",
            "振り替え休日の設定方法",
            "出勤した時にのみ通勤手当をもらう方法",
            "有給の設定方法",
            "休暇の設定方法",
        ),
        description="従業員向けの勤怠管理方法と各種設定",
        icon_name="Users",
    ),
)

CATEGORIES: Mapping[str, Category] = MappingProxyType(
    {category.key: category for category in _CATEGORY_LIST}
)

# Reverse indexes, built once at import time.
_BY_SLUG: Mapping[str, Category] = MappingProxyType(
    {category.slug: category for category in _CATEGORY_LIST}
)
_BY_NAME: Mapping[str, Category] = MappingProxyType(
    {category.name: category for category in _CATEGORY_LIST}
)


def get_main_categories() -> list[str]:
    return list(CATEGORIES.keys())


def get_category(key: str) -> Optional[Category]:
    return CATEGORIES.get(key)


def get_category_by_slug(slug: str) -> Optional[Category]:
    """Exact slug lookup. Returns None when no category uses the slug."""
    return _BY_SLUG.get(slug)


def get_category_by_name(name: str) -> Optional[Category]:
    """Exact canonical-name lookup. No normalization is applied."""
    return _BY_NAME.get(name)


def get_sub_categories(category_key: str) -> list[str]:
    """Return a fresh copy of the subcategory list for a category key."""
    category = CATEGORIES.get(category_key)
    if category is None:
        return []
    return list(category.subcategories)


def get_all_category_pairs() -> list[dict[str, Optional[str]]]:
    pairs: list[dict[str, Optional[str]]] = []
    for category in CATEGORIES.values():
        for sub_category in category.subcategories:
            pairs.append({"main_category": category.name, "sub_category": sub_category})
    return pairs
