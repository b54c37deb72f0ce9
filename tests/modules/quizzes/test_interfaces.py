from modules.quizzes.interfaces import IQuizService
from modules.quizzes.service import QuizService


class TestQuizInterface:
    METHODS = [
        "create_quiz",
        "list_quizzes",
        "get_quiz",
        "update_quiz",
        "delete_quiz",
        "list_public",
        "get_playable",
    ]

    def test_quiz_service_has_interface_methods(self):
        for method in self.METHODS:
            assert hasattr(IQuizService, method)
            assert callable(getattr(QuizService, method))

    def test_service_instance_satisfies_protocol(self, quiz_service):
        assert isinstance(quiz_service, IQuizService)
