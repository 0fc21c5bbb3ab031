"""Tests for classifier module."""

from ehour_sync.classifier import ACTION_VERBS, FeatureNameClassifier, default_classifier


class TestFeatureNameClassifier:
    """Tests for FeatureNameClassifier."""

    def test_capitalized_noun_is_feature(self):
        """Test a capitalized fragment without an action verb is a feature name."""
        assert default_classifier("Dashboard") is True
        assert default_classifier("User Profile") is True

    def test_action_verb_is_subtask(self):
        """Test fragments starting with an action verb are subtasks."""
        assert default_classifier("Fix redirect") is False
        assert default_classifier("Implement paging") is False
        assert default_classifier("Upd styles") is False

    def test_verb_match_is_case_insensitive(self):
        """Test verbs match regardless of case."""
        assert default_classifier("REFACTOR store") is False
        assert default_classifier("ReNaMe field") is False

    def test_verb_match_is_prefix_based(self):
        """Test the verb check is a plain prefix match."""
        # "Address" starts with "add"
        assert default_classifier("Address book") is False
        assert default_classifier("Settings") is False  # "set"

    def test_lowercase_is_subtask(self):
        """Test a lowercase fragment is never a feature name."""
        assert default_classifier("profile page") is False

    def test_empty_fragment(self):
        """Test empty fragments are not feature names."""
        assert default_classifier("") is False
        assert default_classifier("   ") is False

    def test_custom_vocabulary(self):
        """Test the vocabulary can be replaced."""
        classifier = FeatureNameClassifier.from_verbs(["Tweak", " ", "polish"])

        assert classifier.verbs == ("tweak", "polish")
        assert classifier("Tweak layout") is False
        assert classifier("Fix layout") is True

    def test_default_vocabulary(self):
        """Test the default vocabulary."""
        assert "add" in ACTION_VERBS
        assert "build" in ACTION_VERBS
        assert len(ACTION_VERBS) == 26
