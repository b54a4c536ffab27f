import pytest

from redditkit.models import (
    Ban,
    Blocked,
    Moderator,
    Relationship,
    SubredditImage,
    SubredditPostRequirements,
    SubredditRule,
    SubredditRuleCreateRequest,
    SubredditSettings,
    SubredditStyleSheet,
    SubredditTrafficStats,
    Trophy,
    User,
    UserSummary,
)
from redditkit.timestamp import Timestamp

REFERENCE_UNIX = 1136214245
REFERENCE = Timestamp.from_json("2006-01-02T15:04:05Z")


def _settings():
    return SubredditSettings(
        id="t5_test",
        type="private",
        language="en",
        title="hello!",
        description="description",
        sidebar="sidebar",
        submission_text="",
        welcome_message="",
        welcome_message_enabled=False,
        allow_crossposts=False,
        allow_chat_posts=True,
        allow_poll_posts=False,
        allow_free_form_reports=True,
        allow_original_content=False,
        allow_images=True,
        allow_multiple_images_per_post=True,
        exclude_sitewide_banned_users_content=False,
        crowd_control_chat_level=2,
        all_original_content=False,
        suggested_comment_sort=None,
        submit_link_post_label="submit a link!",
        submit_text_post_label="submit a post!",
        post_type="any",
        spam_filter_strength_link_posts="low",
        spam_filter_strength_text_posts="low",
        spam_filter_strength_comments="low",
        show_content_thumbnails=False,
        expand_media_previews_on_comments_pages=True,
        collapse_deleted_comments=False,
        minutes_to_hide_comment_scores=0,
        spoilers_enabled=True,
        header_mouseover_text="hello!",
        mobile_colour="",
        hide_ads=False,
        nsfw=False,
        allow_discovery_in_high_traffic_feeds=True,
        allow_discovery_by_individual_users=True,
        wiki_mode="modonly",
        wiki_minimum_account_age=0,
        wiki_minimum_karma=0,
    )


EXPECTED_SETTINGS_FORM = {
    "type": "private",
    "lang": "en",
    "title": "hello!",
    "public_description": "description",
    "description": "sidebar",
    "submit_text": "",
    "welcome_message_text": "",
    "welcome_message_enabled": "false",
    "allow_post_crossposts": "false",
    "allow_chat_post_creation": "true",
    "allow_polls": "false",
    "free_form_reports": "true",
    "original_content_tag_enabled": "false",
    "allow_images": "true",
    "allow_galleries": "true",
    "exclude_banned_modqueue": "false",
    "crowd_control_chat_level": "2",
    "all_original_content": "false",
    "submit_link_label": "submit a link!",
    "submit_text_label": "submit a post!",
    "link_type": "any",
    "spam_links": "low",
    "spam_selfposts": "low",
    "spam_comments": "low",
    "show_media": "false",
    "show_media_preview": "true",
    "collapse_deleted_comments": "false",
    "comment_score_hide_mins": "0",
    "spoilers_enabled": "true",
    "header-title": "hello!",
    "key_color": "",
    "hide_ads": "false",
    "over_18": "false",
    "allow_top": "true",
    "allow_discovery": "true",
    "wikimode": "modonly",
    "wiki_edit_age": "0",
    "wiki_edit_karma": "0",
}


def test_relationship_from_json():
    rel = Relationship.from_json(
        {"rel_id": "rel_id1", "name": "testuser1", "id": "t2_user1", "date": REFERENCE_UNIX}
    )
    assert rel == Relationship(id="rel_id1", user="testuser1", user_id="t2_user1", created=REFERENCE)


def test_relationship_missing_date():
    rel = Relationship.from_json({"rel_id": "rel_id2"})
    assert rel.created is None
    assert rel.user == ""


def test_moderator_from_json():
    mod = Moderator.from_json(
        {
            "rel_id": "rb_tmatb9",
            "name": "testuser1",
            "id": "t2_test1",
            "date": REFERENCE_UNIX,
            "mod_permissions": ["all"],
        }
    )
    assert mod.permissions == ["all"]
    assert mod.user == "testuser1"
    assert mod.created == REFERENCE


def test_ban_from_json():
    ban = Ban.from_json(
        {"rel_id": "rb_123", "name": "testuser1", "id": "t2_user1", "days_left": 43, "note": "Spam"}
    )
    assert ban.days_left == 43
    assert ban.note == "Spam"
    assert ban.id == "rb_123"


def test_permanent_ban_has_no_days_left():
    ban = Ban.from_json({"rel_id": "rb_456", "days_left": None, "note": "Spam"})
    assert ban.days_left is None


def test_rule_from_json():
    rule = SubredditRule.from_json(
        {
            "kind": "link",
            "short_name": "Read the Wiki Before Posting",
            "violation_reason": "Read the Wiki Before Posting",
            "description": "https://thefitness.wiki",
            "priority": 1,
            "created_utc": REFERENCE_UNIX,
        }
    )
    assert rule.name == "Read the Wiki Before Posting"
    assert rule.priority == 1
    assert rule.created == REFERENCE


def test_rule_request_to_form():
    request = SubredditRuleCreateRequest(
        kind="all", name="testname", violation_reason="testreason", description="testdescription"
    )
    request.validate()
    assert request.to_form() == {
        "kind": "all",
        "short_name": "testname",
        "violation_reason": "testreason",
        "description": "testdescription",
    }


def test_rule_request_form_omits_empty_optionals():
    form = SubredditRuleCreateRequest(kind="comment", name="testname").to_form()
    assert form == {"kind": "comment", "short_name": "testname"}


@pytest.mark.parametrize(
    "request_, field",
    [
        (SubredditRuleCreateRequest(kind="invalid"), "kind"),
        (SubredditRuleCreateRequest(kind="all", name=""), "name"),
        (SubredditRuleCreateRequest(kind="all", name="x" * 101), "name"),
        (
            SubredditRuleCreateRequest(kind="all", name="testname", violation_reason="x" * 101),
            "violation_reason",
        ),
        (
            SubredditRuleCreateRequest(kind="all", name="testname", description="x" * 501),
            "description",
        ),
    ],
)
def test_rule_request_validation_errors(request_, field):
    with pytest.raises(ValueError, match=rf"\.{field}:"):
        request_.validate()


def test_rule_request_limits_are_inclusive():
    request = SubredditRuleCreateRequest(
        kind="link", name="x" * 100, violation_reason="x" * 100, description="x" * 500
    )
    request.validate()
    assert request.to_form()["short_name"] == "x" * 100


def test_traffic_from_json():
    stats = SubredditTrafficStats.from_json([REFERENCE_UNIX, 1, 12, 0])
    assert stats == SubredditTrafficStats(REFERENCE, 1, 12, 0)


def test_traffic_short_array_fills_zeroes():
    stats = SubredditTrafficStats.from_json([REFERENCE_UNIX, 5])
    assert stats.unique_views == 5
    assert stats.total_views == 0
    assert stats.subscribers == 0


def test_traffic_rejects_non_array():
    with pytest.raises(ValueError):
        SubredditTrafficStats.from_json({"start": REFERENCE_UNIX})


def test_stylesheet_from_json():
    sheet = SubredditStyleSheet.from_json(
        {
            "subreddit_id": "t5_2rc7j",
            "images": [
                {
                    "name": "gopher",
                    "link": "url(%%gopher%%)",
                    "url": "http://b.thumbs.redditmedia.com/q5Wb6hTPm2Bd6Of9_xMrTu4n5qgAljJNqtnbE3Tging.png",
                }
            ],
            "stylesheet": ".flair-gopher {}",
        }
    )
    assert sheet.subreddit_id == "t5_2rc7j"
    assert sheet.images == [
        SubredditImage(
            name="gopher",
            link="url(%%gopher%%)",
            url="http://b.thumbs.redditmedia.com/q5Wb6hTPm2Bd6Of9_xMrTu4n5qgAljJNqtnbE3Tging.png",
        )
    ]
    assert sheet.style_sheet == ".flair-gopher {}"


def test_settings_to_form_matches_site_admin_fields():
    assert _settings().to_form() == EXPECTED_SETTINGS_FORM


def test_settings_form_skips_unset_values():
    form = SubredditSettings(id="t5_test", title="hello!").to_form()
    assert form == {"title": "hello!"}


def test_settings_from_json_uses_json_names():
    settings = SubredditSettings.from_json(
        {
            "subreddit_id": "t5_test",
            "subreddit_type": "private",
            "language": "en",
            "content_options": "any",
            "default_set": True,
            "header_hover_text": "hello!",
            "description": "sidebar",
            "public_description": "description",
            "crowd_control_chat_level": 2,
        }
    )
    assert settings.id == "t5_test"
    assert settings.type == "private"
    assert settings.post_type == "any"
    assert settings.allow_discovery_in_high_traffic_feeds is True
    assert settings.sidebar == "sidebar"
    assert settings.description == "description"
    assert settings.suggested_comment_sort is None


def test_post_requirements_from_json():
    reqs = SubredditPostRequirements.from_json(
        {
            "guidelines_text": "test",
            "guidelines_display_policy": None,
            "title_text_min_length": 50,
            "title_text_max_length": 200,
            "body_text_min_length": 50,
            "body_text_max_length": 2000,
            "title_blacklisted_strings": ["no"],
            "body_blacklisted_strings": ["no"],
            "title_required_strings": ["yes"],
            "body_required_strings": ["yes"],
            "domain_blacklist": ["example.com"],
            "domain_whitelist": [],
            "body_restriction_policy": "none",
            "link_restriction_policy": "none",
            "gallery_min_items": 2,
            "gallery_max_items": 20,
            "gallery_captions_requirement": "none",
            "gallery_urls_requirement": "none",
            "link_repost_age": 2,
            "is_flair_required": False,
            "title_regexes": [],
            "body_regexes": [],
        }
    )
    assert reqs == SubredditPostRequirements(
        guidelines="test",
        title_min_length=50,
        title_max_length=200,
        body_min_length=50,
        body_max_length=2000,
        title_blacklisted_strings=["no"],
        body_blacklisted_strings=["no"],
        title_required_strings=["yes"],
        body_required_strings=["yes"],
        domain_blacklist=["example.com"],
        body_restriction_policy="none",
        link_restriction_policy="none",
        gallery_min_items=2,
        gallery_max_items=20,
        gallery_captions_requirement="none",
        gallery_urls_requirement="none",
        link_repost_age=2,
    )


def test_user_from_json():
    user = User.from_json(
        {
            "id": "test",
            "name": "Test_User",
            "created_utc": REFERENCE_UNIX,
            "link_karma": 8239,
            "comment_karma": 130514,
            "has_verified_email": True,
        }
    )
    assert user == User(
        id="test",
        name="Test_User",
        created=REFERENCE,
        post_karma=8239,
        comment_karma=130514,
        has_verified_email=True,
    )


def test_user_summary_from_json():
    summary = UserSummary.from_json(
        {
            "name": "test_user_3",
            "created_utc": REFERENCE_UNIX,
            "link_karma": 126887,
            "comment_karma": 81918,
            "profile_over_18": True,
        }
    )
    assert summary.nsfw is True
    assert summary.post_karma == 126887
    assert summary.created == REFERENCE


def test_blocked_from_json():
    blocked = Blocked.from_json({"name": "test123", "id": "t2_3v9o1yoi", "date": REFERENCE_UNIX})
    assert blocked == Blocked(blocked="test123", blocked_id="t2_3v9o1yoi", created=REFERENCE)


def test_trophy_from_json_with_null_id():
    trophy = Trophy.from_json({"id": None, "name": "Three-Year Club", "description": None})
    assert trophy == Trophy(id="", name="Three-Year Club", description="")