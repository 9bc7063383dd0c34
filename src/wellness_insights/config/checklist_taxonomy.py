"""Personal-problems checklist taxonomy.

Static table of the 183 checklist items: question id, backend category key,
backend field name and display text. Question ids are the keys the
questionnaire form submits; field names must match the backend schema.

The table is validated once at import time. A duplicate id or field, or a gap
in the id sequence, is a contract break and raises TaxonomyError.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from wellness_insights.domain.enums import ChecklistCategory
from wellness_insights.domain.exceptions import TaxonomyError
from wellness_insights.domain.value_objects import ChecklistItem

if TYPE_CHECKING:
    from collections.abc import Mapping

_SOCIAL_FRIENDS: tuple[tuple[int, str, str], ...] = (
    (1, "not_getting_along_with_other_people", "Not getting along with other people"),
    (2, "being_criticized_by_others", "Being criticized by others"),
    (3, "not_fitting_in_with_peers", "Not fitting in with peers"),
    (4, "feeling_uncomfortable_in_social_settings", "Feeling uncomfortable in social settings"),
    (5, "having_a_bad_reputation", "Having a bad reputation"),
    (6, "feeling_immature", "Feeling immature"),
    (7, "being_suspicious_of_others", "Being suspicious of others"),
    (8, "being_shy", "Being shy"),
    (9, "not_having_close_friends", "Not having close friends"),
    (10, "being_taken_advantage_of_by_friends", "Being taken advantage of by friends"),
    (11, "not_having_anyone_to_share_interests_with", "Not having anyone to share interests with"),
    (12, "feeling_lonely", "Feeling lonely"),
    (13, "feeling_unpopular", "Feeling unpopular"),
    (
        14,
        "feeling_uncomfortable_when_talking_to_people",
        "Feeling uncomfortable when talking to people",
    ),
    (15, "feeling_inferior", "Feeling inferior"),
    (16, "feeling_like_people_are_against_me", "Feeling like people are against me"),
    (17, "being_embarrassed_by_family_background", "Being embarrassed by family background"),
    (18, "being_let_down_by_friends", "Being let down by friends"),
    (19, "feeling_different_from_everyone_else", "Feeling different from everyone else"),
    (20, "being_pressured_to_do_the_wrong_thing", "Being pressured to do the wrong thing"),
)

_APPEARANCE: tuple[tuple[int, str, str], ...] = (
    (21, "being_overweight", "Being overweight"),
    (22, "being_too_short_or_too_tall", "Being too short or too tall"),
    (23, "having_a_physical_handicap", "Having a physical handicap"),
    (24, "being_too_thin", "Being too thin"),
    (25, "looking_too_young_or_too_old", "Looking too young or too old"),
    (26, "being_noticed_for_physical_appearance", "Being noticed for physical appearance"),
    (27, "looking_too_plain", "Looking too plain"),
    (28, "feeling_clumsy_and_awkward", "Feeling clumsy and awkward"),
    (29, "not_being_clean_and_well_groomed", "Not being clean and well groomed"),
    (30, "not_having_the_right_clothes", "Not having the right clothes"),
    (31, "having_an_unattractive_face", "Having an unattractive face"),
    (32, "having_scars", "Having scars"),
    (33, "having_facial_blemishes", "Having facial blemishes"),
    (34, "not_being_well_developed", "Not being well developed"),
)

_ATTITUDE_OPINION: tuple[tuple[int, str, str], ...] = (
    (35, "having_a_poor_attitude_about_everything", "Having a poor attitude about everything"),
    (36, "not_having_any_goals_in_life", "Not having any goals in life"),
    (37, "having_a_recent_change_in_attitude", "Having a recent change in attitude"),
    (38, "not_listening_to_the_opinions_of_others", "Not listening to the opinions of others"),
    (39, "having_no_opinions_about_things", "Having no opinions about things"),
    (40, "having_different_values_from_others", "Having different values from others"),
    (41, "not_understanding_the_attitudes_of_others", "Not understanding the attitudes of others"),
    (42, "having_a_poor_attitude_toward_religion", "Having a poor attitude toward religion"),
    (43, "having_a_poor_attitude_toward_school", "Having a poor attitude toward school"),
    (44, "having_a_poor_attitude_toward_work", "Having a poor attitude toward work"),
    (45, "having_a_poor_attitude_toward_family", "Having a poor attitude toward family"),
    (46, "having_a_poor_attitude_toward_self", "Having a poor attitude toward self"),
)

_PARENTS: tuple[tuple[int, str, str], ...] = (
    (47, "father_or_mother_being_sick", "Father or mother being sick"),
    (
        48,
        "father_or_mother_having_emotional_problems",
        "Father or mother having emotional problems",
    ),
    (49, "father_or_mother_being_unemployed", "Father or mother being unemployed"),
    (
        50,
        "father_or_mother_having_problem_with_alcohol",
        "Father or mother having problem with alcohol",
    ),
    (51, "parents_fighting_or_arguing", "Parents fighting or arguing"),
    (
        52,
        "parents_being_separated_or_getting_divorced",
        "Parents being separated or getting divorced",
    ),
    (
        53,
        "parents_being_divorced_remarried_or_stepmother",
        "Parents being divorced, remarried or stepmother",
    ),
    (
        54,
        "having_problems_with_stepfather_or_stepmother",
        "Having problems with stepfather or stepmother",
    ),
    (55, "parents_never_being_home", "Parents never being home"),
    (56, "not_being_able_to_talk_to_parents", "Not being able to talk to parents"),
    (57, "parents_being_too_strict", "Parents being too strict"),
    (58, "parents_interfering_with_decisions", "Parents interfering with decisions"),
    (59, "parents_expecting_too_much", "Parents expecting too much"),
    (
        60,
        "parents_disapproving_of_boyfriend_girlfriend",
        "Parents disapproving of boyfriend/girlfriend",
    ),
    (61, "parents_not_trusting_me", "Parents not trusting me"),
    (62, "parents_disapproving_of_job", "Parents disapproving of job"),
    (
        63,
        "parents_disapproving_of_clothes_or_appearance",
        "Parents disapproving of clothes or appearance",
    ),
    (64, "parents_disapproving_of_dating", "Parents disapproving of dating"),
    (65, "parents_disapproving_of_music", "Parents disapproving of music"),
    (66, "parents_disapproving_of_activities", "Parents disapproving of activities"),
    (67, "parents_favoring_brothers_or_sisters", "Parents favoring brothers or sisters"),
    (68, "being_ignored_by_parents", "Being ignored by parents"),
)

_FAMILY_HOME: tuple[tuple[int, str, str], ...] = (
    (69, "brother_or_sister_being_sick", "Brother or sister being sick"),
    (
        70,
        "brother_or_sister_having_emotional_problems",
        "Brother or sister having emotional problems",
    ),
    (71, "brother_or_sister_being_unemployed_drugs", "Brother or sister being unemployed/drugs"),
    (
        72,
        "brother_or_sister_being_in_trouble_with_law",
        "Brother or sister being in trouble with law",
    ),
    (73, "being_physically_abused_at_home", "Being physically abused at home"),
    (74, "being_sexually_abused_at_home", "Being sexually abused at home"),
    (75, "arguing_with_brother_or_sister", "Arguing with brother or sister"),
    (76, "family_always_arguing", "Family always arguing"),
    (77, "being_bothered_by_brother_or_sister", "Being bothered by brother or sister"),
    (78, "family_fighting_or_arguing", "Family fighting or arguing"),
    (79, "having_problems_with_relatives", "Having problems with relatives"),
    (80, "not_being_any_privacy", "Not being any privacy"),
    (81, "having_to_do_household_chores", "Having to do household chores"),
    (82, "not_feeling_close_to_family", "Not feeling close to family"),
    (83, "family_not_having_enough_money", "Family not having enough money"),
    (84, "not_getting_along_with_neighbors", "Not getting along with neighbors"),
    (85, "not_willing_to_live_at_home", "Not willing to live at home"),
    (86, "home_being_dirty_or_messy", "Home being dirty or messy"),
    (87, "family_having_a_bad_reputation", "Family having a bad reputation"),
    (88, "living_in_a_bad_neighborhood", "Living in a bad neighborhood"),
    (89, "being_adopted", "Being adopted"),
    (90, "not_being_allowed_to_use_the_car", "Not being allowed to use the car"),
    (91, "not_being_allowed_to_buy_a_car", "Not being allowed to buy a car"),
    (92, "wanting_to_run_away_from_home", "Wanting to run away from home"),
)

_SCHOOL: tuple[tuple[int, str, str], ...] = (
    (93, "getting_bad_grades", "Getting bad grades"),
    (94, "not_getting_along_with_teachers", "Not getting along with teachers"),
    (95, "deciding_on_the_right_course_or_studies", "Deciding on the right course or studies"),
    (96, "not_having_good_study_habits", "Not having good study habits"),
    (97, "not_having_a_good_place_to_study", "Not having a good place to study"),
    (98, "taking_the_wrong_courses", "Taking the wrong courses"),
    (99, "not_being_interested_in_school_or_teams", "Not being interested in school or teams"),
    (100, "not_qualifying_for_clubs_or_teams", "Not qualifying for clubs or teams"),
    (101, "not_having_close_friends_at_school", "Not having close friends at school"),
    (102, "school_being_too_large", "School being too large"),
    (103, "missing_school_because_of_illness", "Missing school because of illness"),
    (104, "not_understanding_class_material", "Not understanding class material"),
    (105, "not_getting_along_with_other_students", "Not getting along with other students"),
    (106, "feeling_out_of_place_in_school", "Feeling out of place in school"),
    (107, "not_being_interested_in_school", "Not being interested in school"),
    (108, "having_a_language_problem_in_school", "Having a language problem in school"),
    (109, "being_in_the_wrong_school", "Being in the wrong school"),
    (110, "teachers_not_being_interested_in_students", "Teachers not being interested in students"),
    (111, "being_bored_in_school", "Being bored in school"),
    (112, "getting_in_trouble_in_school", "Getting in trouble in school"),
    (113, "school_being_too_far_from_home", "School being too far from home"),
    (114, "worrying_about_future_job_or_college", "Worrying about future job or college"),
)

_MONEY: tuple[tuple[int, str, str], ...] = (
    (115, "budgeting_money", "Budgeting money"),
    (116, "not_making_enough_money", "Not making enough money"),
    (117, "not_having_a_steady_income", "Not having a steady income"),
    (118, "having_to_spend_savings", "Having to spend savings"),
    (119, "owing_money", "Owing money"),
    (120, "wasting_money", "Wasting money"),
    (121, "depending_on_others_for_money", "Depending on others for money"),
    (122, "lending_money_to_friends_or_family", "Lending money to friends or family"),
    (123, "having_to_give_money_to_parents", "Having to give money to parents"),
    (124, "not_having_enough_money_to_date", "Not having enough money to date"),
    (125, "not_having_gas_money", "Not having gas money"),
    (126, "not_having_money_for_clothes", "Not having money for clothes"),
)

_RELIGION: tuple[tuple[int, str, str], ...] = (
    (127, "feeling_guilty_about_religion", "Feeling guilty about religion"),
    (128, "not_liking_any_religious_beliefs", "Not liking any religious beliefs"),
    (
        129,
        "arguing_with_parents_about_religious_beliefs",
        "Arguing with parents about religious beliefs",
    ),
    (130, "being_confused_about_religious_beliefs", "Being confused about religious beliefs"),
    (131, "falling_in_religious_beliefs", "Falling in religious beliefs"),
    (
        132,
        "boyfriend_girlfriend_having_a_different_religion",
        "Boyfriend/girlfriend having a different religion",
    ),
    (
        133,
        "arguing_with_girlfriend_boyfriend_about_religion",
        "Arguing with girlfriend/boyfriend about religion",
    ),
    (134, "not_being_able_to_get_to_church", "Not being able to get to church"),
    (135, "chores_interfering_with_church_activities", "Chores interfering with church activities"),
    (136, "job_interfering_with_church_activities", "Job interfering with church activities"),
    (
        137,
        "being_upset_by_religious_beliefs_of_others",
        "Being upset by religious beliefs of others",
    ),
    (138, "worrying_about_being_accepted_by_God", "Worrying about being accepted by God"),
    (139, "being_rejected_by_church_members", "Being rejected by church members"),
    (140, "not_having_friends_at_church", "Not having friends at church"),
)

_EMOTIONAL: tuple[tuple[int, str, str], ...] = (
    (141, "feeling_anxious_or_uptight", "Feeling anxious or uptight"),
    (142, "being_afraid_of_things", "Being afraid of things"),
    (
        143,
        "having_the_same_thoughts_over_and_over_again",
        "Having the same thoughts over and over again",
    ),
    (144, "being_tired_and_having_no_energy", "Being tired and having no energy"),
    (145, "feeling_depressed_or_sad", "Feeling depressed or sad"),
    (146, "having_trouble_concentrating", "Having trouble concentrating"),
    (147, "not_remembering_things", "Not remembering things"),
    (148, "getting_too_emotional", "Getting too emotional"),
    (149, "losing_control", "Losing control"),
    (150, "worrying_about_diseases_or_illness", "Worrying about diseases or illness"),
    (151, "having_nightmares", "Having nightmares"),
    (152, "thinking_too_much_about_death", "Thinking too much about death"),
    (153, "being_afraid_of_hurting_self", "Being afraid of hurting self"),
    (154, "feeling_things_are_unreal", "Feeling things are unreal"),
    (155, "crying_without_good_reason", "Crying without good reason"),
    (156, "worrying_about_having_a_nervous_breakdown", "Worrying about having a nervous breakdown"),
    (157, "not_being_able_to_stop_worrying", "Not being able to stop worrying"),
    (158, "not_being_able_to_relax", "Not being able to relax"),
    (159, "being_unhappy_all_the_time", "Being unhappy all the time"),
    (160, "not_having_any_enjoyment_in_life", "Not having any enjoyment in life"),
    (161, "being_influenced_by_others", "Being influenced by others"),
    (162, "behaving_in_strange_ways", "Behaving in strange ways"),
    (163, "feeling_out_of_control", "Feeling out of control"),
    (164, "being_afraid_of_hurting_someone_else", "Being afraid of hurting someone else"),
)

_DATING_SEX: tuple[tuple[int, str, str], ...] = (
    (165, "being_uncomfortable_with_opposite_sex", "Being uncomfortable with opposite sex"),
    (
        166,
        "not_being_able_to_get_a_boyfriend_girlfriend",
        "Not being able to get a boyfriend/girlfriend",
    ),
    (167, "having_problems_with_boyfriend_girlfriend", "Having problems with boyfriend/girlfriend"),
    (
        168,
        "wanting_to_break_up_with_boyfriend_girlfriend",
        "Wanting to break up with boyfriend/girlfriend",
    ),
    (169, "losing_boyfriend_girlfriend", "Losing boyfriend/girlfriend"),
    (
        170,
        "arguing_with_boyfriend_girlfriend_and_dating_and_sex",
        "Arguing with boyfriend/girlfriend and dating and sex",
    ),
    (171, "not_having_enough_dates", "Not having enough dates"),
    (172, "worrying_about_getting_pregnant", "Worrying about getting pregnant"),
    (
        173,
        "not_being_able_to_talk_about_dating_and_sex",
        "Not being able to talk about dating and sex",
    ),
    (
        174,
        "being_pregnant_or_girlfriend_being_pregnant",
        "Being pregnant or girlfriend being pregnant",
    ),
    (175, "not_knowing_enough_about_sex", "Not knowing enough about sex"),
    (176, "worrying_about_sex", "Worrying about sex"),
    (177, "thinking_about_sex_too_often", "Thinking about sex too often"),
    (178, "worrying_about_being_gay", "Worrying about being gay"),
    (
        179,
        "being_troubled_by_sexual_attitudes_of_friends",
        "Being troubled by sexual attitudes of friends",
    ),
    (180, "being_troubled_by_unusual_sexual_behavior", "Being troubled by unusual sexual behavior"),
    (181, "being_sexually_underdeveloped", "Being sexually underdeveloped"),
    (
        182,
        "boyfriend_girlfriend_wanting_to_get_married",
        "Boyfriend/girlfriend wanting to get married",
    ),
    (
        183,
        "feeling_used_or_being_pushed_into_having_sex",
        "Feeling used or being pushed into having sex",
    ),
)

_TABLE: tuple[tuple[ChecklistCategory, tuple[tuple[int, str, str], ...]], ...] = (
    (ChecklistCategory.SOCIAL_FRIENDS, _SOCIAL_FRIENDS),
    (ChecklistCategory.APPEARANCE, _APPEARANCE),
    (ChecklistCategory.ATTITUDE_OPINION, _ATTITUDE_OPINION),
    (ChecklistCategory.PARENTS, _PARENTS),
    (ChecklistCategory.FAMILY_HOME, _FAMILY_HOME),
    (ChecklistCategory.SCHOOL, _SCHOOL),
    (ChecklistCategory.MONEY, _MONEY),
    (ChecklistCategory.RELIGION, _RELIGION),
    (ChecklistCategory.EMOTIONAL, _EMOTIONAL),
    (ChecklistCategory.DATING_SEX, _DATING_SEX),
)


def _build_items() -> tuple[ChecklistItem, ...]:
    return tuple(
        ChecklistItem(question_id=qid, category=category, field=field, text=text)
        for category, rows in _TABLE
        for qid, field, text in rows
    )


def validate_taxonomy(items: tuple[ChecklistItem, ...]) -> None:
    """Check the checklist table for internal consistency.

    Args:
        items: Checklist items in question-id order.

    Raises:
        TaxonomyError: If ids are not 1..N in order, or a field repeats
            within a category, or a category has no items.
    """
    expected_ids = list(range(1, len(items) + 1))
    actual_ids = [item.question_id for item in items]
    if actual_ids != expected_ids:
        raise TaxonomyError("Checklist question ids must be contiguous from 1")

    seen: set[tuple[ChecklistCategory, str]] = set()
    for item in items:
        key = (item.category, item.field)
        if key in seen:
            raise TaxonomyError(f"Duplicate checklist field {item.category.value}.{item.field}")
        seen.add(key)

    covered = {item.category for item in items}
    missing = [category.value for category in ChecklistCategory if category not in covered]
    if missing:
        raise TaxonomyError(f"Checklist categories without items: {', '.join(missing)}")


CHECKLIST_ITEMS: tuple[ChecklistItem, ...] = _build_items()
validate_taxonomy(CHECKLIST_ITEMS)

TOTAL_ITEMS: int = len(CHECKLIST_ITEMS)

ITEMS_BY_QUESTION: Mapping[int, ChecklistItem] = MappingProxyType(
    {item.question_id: item for item in CHECKLIST_ITEMS}
)

FIELDS_BY_CATEGORY: Mapping[ChecklistCategory, tuple[str, ...]] = MappingProxyType(
    {
        category: tuple(item.field for item in CHECKLIST_ITEMS if item.category is category)
        for category in ChecklistCategory
    }
)
