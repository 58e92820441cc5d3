"""Step inference for onboarding-style categories.

Some main categories are presented as an ordered sequence of steps rather
than as plain subcategory sections. The step a manual belongs to is inferred
from its free-text subcategory using the rule tables below.

Matching is deliberately loose: an exact match on the trimmed subcategory is
tried first, then the first rule (in declared order) whose key contains the
subcategory or is contained by it. Rule order therefore matters; when one key
is a substring of an unrelated one the earlier rule wins. If the taxonomy
grows, this may need anchored or whole-phrase matching.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional


class StepInfo(NamedTuple):
    step_number: Optional[int]
    step_name: Optional[str]


NO_STEP = StepInfo(None, None)


def _rules(entries: list[tuple[str, int, str]]) -> Mapping[str, StepInfo]:
    return MappingProxyType({key: StepInfo(number, name) for key, number, name in entries})


STEP_RULES: Mapping[str, Mapping[str, StepInfo]] = MappingProxyType({
    "入社（入社日までに登録）": _rules([
        ("本人に情報を登録してもらう場合", 1, "本人に本人情報を登録してもらう場合"),
        ("管理者が情報を登録する場合", 1, "本人に本人情報を登録してもらう場合"),
        ("給与情報の設定", 2, "給与情報の設定"),
        ("通勤手当の設定", 3, "通勤手当の設定"),
        ("税金関係", 4, "税金関係"),
        ("保険関係", 5, "保険関係"),
        ("マイナンバー", 6, "マイナンバー"),
    ]),
    "入社（入社日以降に登録）": _rules([
        (
            "住民税を特別徴収に切り替えましょう",
            1,
            "住民税を特別徴収に切り替えましょう",
        ),
        (
            "（STEP2）住民税の通知書の内容をfreeeに登録しましょう",
            2,
            "住民税の通知書の内容をfreeeに登録しましょう",
        ),
        (
            "社会保険の情報を反映する方法　※手続き完了したら設定しましょう！",
            3,
            "社会保険の情報を反映する方法　※手続き完了したら設定しましょう！",
        ),
        (
            "雇用保険の情報を反映する方法　※手続き完了したら設定しましょう！",
            4,
            "雇用保険の情報を反映する方法　※手続き完了したら設定しましょう！",
        ),
    ]),
})


def has_step_rules(main_category: Optional[str]) -> bool:
    if not main_category:
        return False
    return main_category.strip() in STEP_RULES


def infer_step(main_category: Optional[str], sub_category: Optional[str]) -> StepInfo:
    """Infer the step for a manual from its main and sub category."""
    if not main_category or not sub_category:
        return NO_STEP

    rules = STEP_RULES.get(main_category.strip())
    if rules is None:
        return NO_STEP

    target = sub_category.strip()
    if not target:
        return NO_STEP

    exact = rules.get(target)
    if exact is not None:
        return exact

    for key, info in rules.items():
        if key in target or target in key:
            return info

    return NO_STEP
