from sermo import LlmProfile, LlmProvider


def main():
    # Ollama running locally on the default port
    profile = LlmProfile(
        provider=LlmProvider.OLLAMA,
        model_name="gemma3",
        temperature=0.7,
        max_tokens=100,
    )

    message = "Hello! Tell me something interesting about Python."
    response = profile.send_single(message)
    print(f"Ollama response: {response}")


if __name__ == "__main__":
    main()
