"""Expression values and trees, evaluation, built-in functions and static inspection."""