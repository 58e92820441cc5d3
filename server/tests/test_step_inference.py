from manual_portal.catalog.steps import NO_STEP, STEP_RULES, StepInfo, has_step_rules, infer_step

ONBOARDING = "入社（入社日までに登録）"
ONBOARDING_AFTER = "入社（入社日以降に登録）"


def test_exact_match_returns_rule():
    assert infer_step(ONBOARDING, "給与情報の設定") == StepInfo(2, "給与情報の設定")


def test_exact_match_ignores_surrounding_whitespace():
    assert infer_step(ONBOARDING, "  マイナンバー\n") == StepInfo(6, "マイナンバー")


def test_alternate_phrasings_share_a_step():
    self_registration = infer_step(ONBOARDING, "本人に情報を登録してもらう場合")
    admin_registration = infer_step(ONBOARDING, "管理者が情報を登録する場合")
    assert self_registration == admin_registration == StepInfo(1, "本人に本人情報を登録してもらう場合")


def test_partial_match_when_key_contains_subcategory():
    # The taxonomy spelling lacks the "（STEP2）" prefix used in the rule key.
    step = infer_step(ONBOARDING_AFTER, "住民税の通知書の内容をfreeeに登録しましょう")
    assert step == StepInfo(2, "住民税の通知書の内容をfreeeに登録しましょう")


def test_partial_match_when_subcategory_contains_key():
    step = infer_step(ONBOARDING, "【重要】通勤手当の設定（定期代）")
    assert step == StepInfo(3, "通勤手当の設定")


def test_partial_match_short_fragment_hits_first_rule_in_order():
    # Fragments match the first key that contains them.
    assert infer_step(ONBOARDING, "保険").step_number == 5
    assert infer_step(ONBOARDING, "税").step_number == 4
    # "の設定" is inside both 給与情報の設定 (STEP2) and 通勤手当の設定 (STEP3).
    assert infer_step(ONBOARDING, "の設定").step_number == 2


def test_partial_match_trailing_note_variant():
    step = infer_step(ONBOARDING_AFTER, "雇用保険の情報を反映する方法")
    assert step.step_number == 4


def test_no_match_returns_no_step():
    assert infer_step(ONBOARDING, "存在しないサブカテゴリ") == NO_STEP


def test_missing_inputs_return_no_step():
    assert infer_step(ONBOARDING, None) == NO_STEP
    assert infer_step(ONBOARDING, "") == NO_STEP
    assert infer_step(ONBOARDING, "   ") == NO_STEP
    assert infer_step(None, "給与情報の設定") == NO_STEP


def test_category_without_rules_returns_no_step():
    assert infer_step("賞与", "賞与") == NO_STEP


def test_main_category_is_trimmed_before_lookup():
    assert infer_step(f" {ONBOARDING} ", "税金関係") == StepInfo(4, "税金関係")


def test_has_step_rules():
    assert has_step_rules(ONBOARDING)
    assert has_step_rules(ONBOARDING_AFTER)
    assert not has_step_rules("退職")
    assert not has_step_rules(None)
    assert set(STEP_RULES) == {ONBOARDING, ONBOARDING_AFTER}
