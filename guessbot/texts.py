WELCOME_TEXT = (
    "🐇 Hello there.\n\n"
    "Think of something. I will ask yes/no questions and then guess what it is.\n"
    "If I get it wrong, teach me a question and I will never forget it.\n\n"
    "Press «🎮 Play» whenever you are ready."
)

INVITE_TEXT = "Do you... wanna play a game...?"

HELP_TEXT = (
    "<b>How to play</b>\n\n"
    "<b>🎮 Play</b> — start a round and answer my questions\n"
    "<b>🧠 Memory</b> — see how much I have learned\n"
    "<b>♻️ Reset memory</b> — forget everything you taught me\n\n"
    "While teaching me you can type «cancel» to stop."
)

LATER_TEXT = "...maybe later..."
CORRECT_TEXT = "Heh heh heh... I always win. Play again?"
LOST_TEXT = "Hmph. You got me. Help me learn.\n\nWhat were you thinking of?"
LEARNED_TEXT = "Hmph. Fine. I've 'learned'. Let's play again."
NOTHING_TO_LEARN_TEXT = "I did not even ask a question yet. There is nothing I can learn from that. Play again?"
ASK_QUESTION_TEXT = (
    "Give me a yes/no question that tells <b>{object_name}</b> apart from <b>{guess}</b>."
)
ASK_SIDE_TEXT = "For <b>{object_name}</b>, what is the answer to «{question}»?"
TEACH_CANCELLED_TEXT = "Fine. Keep your secrets."
ROUND_EXPIRED_TEXT = "That round is over. Press «🎮 Play» to start a new one."
RESET_CONFIRM_TEXT = "Forget everything I have learned and go back to my first questions?"
RESET_DONE_TEXT = "Memory wiped. I only know the basics now."
RESET_KEPT_TEXT = "Memory kept."


def guess_text(guess: str) -> str:
    return f"Is it... {guess}?"


def memory_text(questions: int, guesses: int, depth: int) -> str:
    return (
        "🧠 <b>What I know</b>\n\n"
        f"• Questions: {questions}\n"
        f"• Things I can guess: {guesses}\n"
        f"• Longest chain of questions: {depth}"
    )
